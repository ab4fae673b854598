"""
주간 퀴즈 보상 작업

가장 최근에 끝난 주(월~월, 서버 타임존 기준)의 점수 합계 1위에게
1회만 보상을 지급한다. 주당 1건인 마커(period_key 유니크)가
중복 지급을 막는다.
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from sheetapi.repositories.quiz_repository import QuizScoreRepository
from sheetapi.repositories.weekly_reward_repository import WeeklyRewardRepository
from sheetapi.schemas.weekly_reward import WeeklyRewardResult, WeeklyRewardStatus
from sheetapi.services import reward_policy
from sheetapi.services.point_service import PointService
from sheetapi.utils.date_utils import last_completed_week

logger = logging.getLogger(__name__)


class WeeklyRewardService:
    def __init__(self, db: Session, point_service: Optional[PointService] = None):
        self.db = db
        self.marker_repo = WeeklyRewardRepository(db)
        self.score_repo = QuizScoreRepository(db)
        self.point_service = point_service or PointService(db)

    def pay_weekly_reward(self, now: Optional[datetime] = None) -> WeeklyRewardResult:
        window = last_completed_week(now)
        result = WeeklyRewardResult(
            status=WeeklyRewardStatus.ALREADY_PAID,
            period_key=window.period_key,
            week_start=window.start,
            week_end=window.end,
        )

        if self.marker_repo.is_paid(window.period_key):
            logger.debug(f"Weekly reward already paid for {window.period_key}")
            return result

        totals = self.score_repo.totals_between(window.start, window.end, limit=1)
        if not totals:
            # 마커를 남기지 않으므로 같은 주에 점수가 생기면 다음 실행에서 지급된다
            logger.info(f"No quiz scores for week {window.period_key}")
            result.status = WeeklyRewardStatus.NO_SCORES
            return result

        winner = totals[0]
        amount = reward_policy.WEEKLY_QUIZ_REWARD_POINTS
        try:
            if not self.marker_repo.try_mark(
                window.period_key, winner.user_id, winner.total_score, amount
            ):
                logger.info(f"Weekly reward marker conflict for {window.period_key}")
                return result

            self.point_service.weekly_quiz_reward(
                winner.user_id, window.period_key, winner.total_score, commit=False
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.error(
                f"Weekly reward payout failed for {window.period_key}", exc_info=True
            )
            raise

        result.status = WeeklyRewardStatus.PAID
        result.winner_id = winner.user_id
        result.winner_username = winner.username
        result.total_score = winner.total_score
        result.amount = amount
        return result
