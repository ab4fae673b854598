"""
학습지 API 라우터

- GET /worksheets: 목록 (과목 필터, 최신순/조회수순)
- POST /worksheets: 학습지 메타데이터 등록
- GET /worksheets/{id}: 상세 조회 - 최초 조회 시 조회수 +1, 업로더 100pt
- GET /worksheets/{id}/download: 업로드 파일 URL
- PATCH /worksheets/{id}/thumbnail: 표지 변경 (업로더만)
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from sheetapi.core.auth_middleware import get_current_active_user
from sheetapi.deps import get_worksheet_service
from sheetapi.schemas.user import User as UserSchema
from sheetapi.schemas.worksheet import (
    WorksheetCreateRequest,
    WorksheetDownloadResponse,
    WorksheetSchema,
    WorksheetSort,
    WorksheetThumbnailUpdateRequest,
    WorksheetViewResponse,
)
from sheetapi.services.worksheet_service import WorksheetService

router = APIRouter(prefix="/worksheets", tags=["worksheets"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[WorksheetSchema])
def list_worksheets(
    subject_id: Optional[int] = Query(None, description="과목 필터"),
    sort: WorksheetSort = Query("recent", description="recent | views"),
    current_user: UserSchema = Depends(get_current_active_user),
    worksheet_service: WorksheetService = Depends(get_worksheet_service),
) -> List[WorksheetSchema]:
    return worksheet_service.list_worksheets(subject_id=subject_id, sort=sort)


@router.post("", response_model=WorksheetSchema, status_code=status.HTTP_201_CREATED)
def create_worksheet(
    request: WorksheetCreateRequest,
    current_user: UserSchema = Depends(get_current_active_user),
    worksheet_service: WorksheetService = Depends(get_worksheet_service),
) -> WorksheetSchema:
    return worksheet_service.create_worksheet(current_user.id, request)


@router.get("/{worksheet_id}", response_model=WorksheetViewResponse)
def view_worksheet(
    worksheet_id: int = Path(..., description="학습지 ID"),
    current_user: UserSchema = Depends(get_current_active_user),
    worksheet_service: WorksheetService = Depends(get_worksheet_service),
) -> WorksheetViewResponse:
    """
    학습지 상세 조회

    본인 학습지이거나 이미 조회한 학습지면 viewCounted=false 이고
    포인트/조회수 변화가 없다.
    """
    return worksheet_service.view_worksheet(worksheet_id, current_user.id)


@router.get("/{worksheet_id}/download", response_model=WorksheetDownloadResponse)
def download_worksheet(
    worksheet_id: int = Path(..., description="학습지 ID"),
    current_user: UserSchema = Depends(get_current_active_user),
    worksheet_service: WorksheetService = Depends(get_worksheet_service),
) -> WorksheetDownloadResponse:
    return worksheet_service.get_download_url(worksheet_id)


@router.patch("/{worksheet_id}/thumbnail", response_model=WorksheetSchema)
def update_thumbnail(
    request: WorksheetThumbnailUpdateRequest,
    worksheet_id: int = Path(..., description="학습지 ID"),
    current_user: UserSchema = Depends(get_current_active_user),
    worksheet_service: WorksheetService = Depends(get_worksheet_service),
) -> WorksheetSchema:
    return worksheet_service.update_thumbnail(
        worksheet_id, current_user.id, request.thumbnail_url
    )
