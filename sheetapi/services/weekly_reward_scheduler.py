import asyncio
import logging
from typing import Callable, Optional

from sqlalchemy.orm import Session

from sheetapi.database.session import get_db_context
from sheetapi.schemas.weekly_reward import WeeklyRewardResult
from sheetapi.services.weekly_reward_service import WeeklyRewardService

logger = logging.getLogger(__name__)


class WeeklyRewardScheduler:
    """주간 보상 작업을 주기적으로 실행하는 백그라운드 태스크

    FastAPI lifespan 에서 start/stop 한다. 한 번의 실행 실패는 로그만
    남기고 다음 주기에 다시 시도한다.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        interval_hours: float = 6,
        service_factory: Callable[[Session], WeeklyRewardService] = WeeklyRewardService,
        initial_delay_seconds: float = 0,
    ):
        self.session_factory = session_factory
        self.interval_seconds = interval_hours * 3600
        self.service_factory = service_factory
        self.initial_delay_seconds = initial_delay_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def run_once(self) -> WeeklyRewardResult:
        """새 세션으로 작업 1회 실행"""
        with get_db_context(self.session_factory) as db:
            result = self.service_factory(db).pay_weekly_reward()
        logger.info(
            f"Weekly reward check: period={result.period_key} status={result.status.value}"
        )
        return result

    async def tick(self) -> Optional[WeeklyRewardResult]:
        try:
            return await asyncio.to_thread(self.run_once)
        except Exception as e:
            logger.error(f"Weekly reward check failed: {e}", exc_info=True)
            return None

    async def _loop(self) -> None:
        if self.initial_delay_seconds:
            await asyncio.sleep(self.initial_delay_seconds)
        while True:
            await self.tick()
            await asyncio.sleep(self.interval_seconds)

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._loop())
        logger.info(
            f"Weekly reward scheduler started (interval={self.interval_seconds:.0f}s)"
        )

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Weekly reward scheduler stopped")
