from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class WeeklyRewardStatus(str, Enum):
    PAID = "PAID"
    ALREADY_PAID = "ALREADY_PAID"
    NO_SCORES = "NO_SCORES"


class WeeklyRewardMarkerSchema(BaseModel):
    id: int
    period_key: str
    winner_id: int
    total_score: int
    amount: int
    created_at: datetime

    class Config:
        from_attributes = True


class WeeklyRewardResult(BaseModel):
    status: WeeklyRewardStatus
    period_key: str = Field(..., description="주 시작(월요일) ISO 날짜")
    week_start: datetime
    week_end: datetime
    winner_id: Optional[int] = None
    winner_username: Optional[str] = None
    total_score: Optional[int] = None
    amount: int = 0
