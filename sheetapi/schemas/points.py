from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from sheetapi.models.points import TransactionType


class PointTransactionEntry(BaseModel):
    """포인트 거래 기록"""

    id: int = Field(..., description="거래 ID")
    from_user_id: Optional[int] = Field(None, description="보낸 사람 ID")
    from_username: Optional[str] = Field(None, description="보낸 사람 이름")
    to_user_id: int = Field(..., description="받는 사람 ID")
    to_username: Optional[str] = Field(None, description="받는 사람 이름")
    amount: int = Field(..., description="포인트 변동량 (부호 포함)")
    type: TransactionType = Field(..., description="거래 유형")
    description: str = Field("", description="거래 설명")
    created_at: datetime = Field(..., description="생성 시간")

    class Config:
        from_attributes = True


class BalanceResponse(BaseModel):
    """포인트 잔액 응답"""

    points: int = Field(..., description="현재 잔액")
    total_earned: int = Field(..., alias="totalEarned", description="누적 획득 포인트")

    class Config:
        populate_by_name = True


class TransferRequest(BaseModel):
    """포인트 전송 요청"""

    to_user_id: int = Field(..., gt=0, description="받는 사람 ID")
    amount: int = Field(..., description="전송할 포인트 (양수)")


class TransferResult(BaseModel):
    """포인트 전송 결과"""

    message: str
    amount: int
    fee: int
    sender_points: int = Field(..., alias="senderPoints")

    class Config:
        populate_by_name = True


class AdminPointsAdjustmentRequest(BaseModel):
    """관리자 포인트 조정 요청"""

    amount: int = Field(..., description="조정할 포인트 (양수: 추가, 음수: 차감)")


class AdminPointsAdjustmentResponse(BaseModel):
    message: str
    points: int
