from typing import List

from fastapi import APIRouter, Depends, status

from sheetapi.core.auth_middleware import get_current_active_user
from sheetapi.deps import get_worksheet_service
from sheetapi.schemas.user import User as UserSchema
from sheetapi.schemas.worksheet import SubjectCreateRequest, SubjectSchema
from sheetapi.services.worksheet_service import WorksheetService

router = APIRouter(prefix="/subjects", tags=["subjects"])


@router.get("", response_model=List[SubjectSchema])
def list_subjects(
    current_user: UserSchema = Depends(get_current_active_user),
    worksheet_service: WorksheetService = Depends(get_worksheet_service),
) -> List[SubjectSchema]:
    return worksheet_service.list_subjects()


@router.post("", response_model=SubjectSchema, status_code=status.HTTP_201_CREATED)
def create_subject(
    request: SubjectCreateRequest,
    current_user: UserSchema = Depends(get_current_active_user),
    worksheet_service: WorksheetService = Depends(get_worksheet_service),
) -> SubjectSchema:
    return worksheet_service.create_subject(request, created_by=current_user.id)
