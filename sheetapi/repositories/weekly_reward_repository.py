from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sheetapi.models.weekly_reward import WeeklyRewardMarker
from sheetapi.repositories.base import BaseRepository
from sheetapi.schemas.weekly_reward import WeeklyRewardMarkerSchema


class WeeklyRewardRepository(BaseRepository[WeeklyRewardMarker, WeeklyRewardMarkerSchema]):
    def __init__(self, db: Session):
        super().__init__(WeeklyRewardMarker, WeeklyRewardMarkerSchema, db)

    def is_paid(self, period_key: str) -> bool:
        return self.exists({"period_key": period_key})

    def try_mark(
        self, period_key: str, winner_id: int, total_score: int, amount: int
    ) -> bool:
        """마커 삽입 (flush). period_key 충돌 시 롤백 후 False"""
        self.db.add(
            WeeklyRewardMarker(
                period_key=period_key,
                winner_id=winner_id,
                total_score=total_score,
                amount=amount,
            )
        )
        try:
            self.db.flush()
        except IntegrityError:
            self.db.rollback()
            return False
        return True
