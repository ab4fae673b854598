"""
포인트 API 라우터

- POST /points/transfer: 팔로우한 사용자에게 전송 (수수료 8% 소멸)
- GET /points/history: 최근 거래 내역 (최대 50건)
- GET /points/balance: 내 잔액 / 누적 획득

관리자 조정은 admin_router 의 PATCH /admin/accounts/{id}/points
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from sheetapi.core.auth_middleware import get_current_active_user
from sheetapi.deps import get_point_service
from sheetapi.schemas.points import (
    BalanceResponse,
    PointTransactionEntry,
    TransferRequest,
    TransferResult,
)
from sheetapi.schemas.user import User as UserSchema
from sheetapi.services.point_service import PointService

router = APIRouter(prefix="/points", tags=["points"])
logger = logging.getLogger(__name__)


@router.post("/transfer", response_model=TransferResult)
def transfer_points(
    request: TransferRequest,
    current_user: UserSchema = Depends(get_current_active_user),
    point_service: PointService = Depends(get_point_service),
) -> TransferResult:
    """
    포인트 전송

    HTTP Status:
        200: 전송 완료
        400: 금액 오류 / 자기 자신 / 팔로우하지 않음 / 잔액 부족
        404: 받는 사람 없음
    """
    return point_service.transfer(
        sender_id=current_user.id,
        receiver_id=request.to_user_id,
        amount=request.amount,
    )


@router.get("/history", response_model=List[PointTransactionEntry])
def get_history(
    current_user: UserSchema = Depends(get_current_active_user),
    point_service: PointService = Depends(get_point_service),
) -> List[PointTransactionEntry]:
    return point_service.get_history(current_user.id)


@router.get("/balance", response_model=BalanceResponse)
def get_balance(
    current_user: UserSchema = Depends(get_current_active_user),
    point_service: PointService = Depends(get_point_service),
) -> BalanceResponse:
    return point_service.get_balance(current_user.id)
