"""
관리자 API 라우터 - 모든 엔드포인트는 role=admin 필요 (403)
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Path, status

from sheetapi.core.auth_middleware import require_admin
from sheetapi.deps import get_admin_service
from sheetapi.schemas.common import MessageResponse
from sheetapi.schemas.points import (
    AdminPointsAdjustmentRequest,
    AdminPointsAdjustmentResponse,
)
from sheetapi.schemas.quiz import QuizSummary
from sheetapi.schemas.user import (
    AccountCreateRequest,
    AccountCreateResponse,
    User as UserSchema,
)
from sheetapi.schemas.weekly_reward import WeeklyRewardResult
from sheetapi.schemas.worksheet import (
    WorksheetViewsUpdateRequest,
    WorksheetViewsUpdateResponse,
)
from sheetapi.services.admin_service import AdminService

router = APIRouter(prefix="/admin", tags=["admin"])
logger = logging.getLogger(__name__)


@router.get("/accounts", response_model=List[UserSchema])
def list_accounts(
    admin: UserSchema = Depends(require_admin),
    admin_service: AdminService = Depends(get_admin_service),
) -> List[UserSchema]:
    return admin_service.list_accounts()


@router.post(
    "/accounts",
    response_model=AccountCreateResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_account(
    request: AccountCreateRequest,
    admin: UserSchema = Depends(require_admin),
    admin_service: AdminService = Depends(get_admin_service),
) -> AccountCreateResponse:
    return admin_service.create_account(request.username)


@router.delete("/accounts/{user_id}", response_model=MessageResponse)
def delete_account(
    user_id: int = Path(...),
    admin: UserSchema = Depends(require_admin),
    admin_service: AdminService = Depends(get_admin_service),
) -> MessageResponse:
    return MessageResponse(message=admin_service.delete_account(user_id))


@router.patch(
    "/accounts/{user_id}/points", response_model=AdminPointsAdjustmentResponse
)
def adjust_points(
    request: AdminPointsAdjustmentRequest,
    user_id: int = Path(...),
    admin: UserSchema = Depends(require_admin),
    admin_service: AdminService = Depends(get_admin_service),
) -> AdminPointsAdjustmentResponse:
    """
    관리자 포인트 조정

    amount 는 0 이 아닌 정수. 음수면 차감 (잔액이 음수가 될 수 있음),
    양수면 누적 획득 포인트에도 반영된다.
    """
    points = admin_service.adjust_points(user_id, request.amount, admin_id=admin.id)
    sign = "+" if request.amount > 0 else ""
    return AdminPointsAdjustmentResponse(
        message=f"Adjusted points by {sign}{request.amount}", points=points
    )


@router.patch(
    "/worksheets/{worksheet_id}/views", response_model=WorksheetViewsUpdateResponse
)
def set_worksheet_views(
    request: WorksheetViewsUpdateRequest,
    worksheet_id: int = Path(...),
    admin: UserSchema = Depends(require_admin),
    admin_service: AdminService = Depends(get_admin_service),
) -> WorksheetViewsUpdateResponse:
    views = admin_service.set_worksheet_views(worksheet_id, request.views)
    return WorksheetViewsUpdateResponse(message="Views updated", views=views)


@router.delete("/worksheets/{worksheet_id}", response_model=MessageResponse)
def delete_worksheet(
    worksheet_id: int = Path(...),
    admin: UserSchema = Depends(require_admin),
    admin_service: AdminService = Depends(get_admin_service),
) -> MessageResponse:
    return MessageResponse(message=admin_service.delete_worksheet(worksheet_id))


@router.delete("/subjects/{subject_id}", response_model=MessageResponse)
def delete_subject(
    subject_id: int = Path(...),
    admin: UserSchema = Depends(require_admin),
    admin_service: AdminService = Depends(get_admin_service),
) -> MessageResponse:
    """과목 삭제 - 소속 학습지와 조회 기록도 함께 삭제 (지급된 포인트는 유지)"""
    return MessageResponse(message=admin_service.delete_subject(subject_id))


@router.get("/quizzes", response_model=List[QuizSummary])
def list_quizzes(
    admin: UserSchema = Depends(require_admin),
    admin_service: AdminService = Depends(get_admin_service),
) -> List[QuizSummary]:
    return admin_service.list_quizzes()


@router.delete("/quizzes/{quiz_id}", response_model=MessageResponse)
def delete_quiz(
    quiz_id: int = Path(...),
    admin: UserSchema = Depends(require_admin),
    admin_service: AdminService = Depends(get_admin_service),
) -> MessageResponse:
    return MessageResponse(message=admin_service.delete_quiz(quiz_id))


@router.post("/rewards/weekly/run", response_model=WeeklyRewardResult)
def run_weekly_reward(
    admin: UserSchema = Depends(require_admin),
    admin_service: AdminService = Depends(get_admin_service),
) -> WeeklyRewardResult:
    """주간 보상 작업 즉시 실행 (이미 지급된 주면 ALREADY_PAID)"""
    return admin_service.run_weekly_reward()
