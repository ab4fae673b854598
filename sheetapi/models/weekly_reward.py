from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from sheetapi.models.base import Base, IdType, utc_now


class WeeklyRewardMarker(Base):
    """
    주간 보상 지급 마커

    period_key(주 시작 월요일, ISO 날짜) 당 1건. 존재 자체가 중복 지급 방지 장치다.
    """

    __tablename__ = "weekly_reward_markers"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    period_key: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    winner_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    total_score: Mapped[int] = mapped_column(BigInteger, nullable=False)
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
