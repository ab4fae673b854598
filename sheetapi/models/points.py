"""
포인트 원장 데이터 모델

잔액(User.points)의 모든 변동은 이 테이블에 한 건씩 기록된다.
레코드는 생성 후 수정되지 않으며, 계정 삭제에 따른 연쇄 삭제만 허용된다.
"""

import enum
from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, DateTime, Enum, ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sheetapi.models.base import Base, IdType, utc_now


class TransactionType(str, enum.Enum):
    VIEW_REWARD = "VIEW_REWARD"  # 학습지 최초 조회 보상 (업로더)
    TRANSFER = "TRANSFER"  # 친구 간 포인트 전송
    FEE = "FEE"  # 전송 수수료 (소멸)
    ADMIN_ADJUST = "ADMIN_ADJUST"  # 관리자 조정
    QUIZ_PLAY_REWARD = "QUIZ_PLAY_REWARD"  # 퀴즈 플레이 보상 (출제자)
    WEEKLY_QUIZ_REWARD = "WEEKLY_QUIZ_REWARD"  # 주간 퀴즈 리더보드 1위 보상


class PointTransaction(Base):
    __tablename__ = "point_transactions"
    __table_args__ = (
        Index("idx_point_tx_to_user", "to_user_id", "created_at"),
        Index("idx_point_tx_from_user", "from_user_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)

    # 보낸 사람 - 관리자 조정/주간 보상처럼 출처가 없는 경우 NULL
    from_user_id: Mapped[Optional[int]] = mapped_column(
        BigInteger, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    # 받는 사람 (수수료는 보낸 사람 자신)
    to_user_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    # 부호 있는 변동량 (수수료는 음수)
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    type: Mapped[TransactionType] = mapped_column(
        Enum(TransactionType, native_enum=False, length=32), nullable=False
    )
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )

    from_user = relationship("User", foreign_keys=[from_user_id], lazy="joined")
    to_user = relationship("User", foreign_keys=[to_user_id], lazy="joined")
