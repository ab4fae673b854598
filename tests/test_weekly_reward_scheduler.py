import asyncio
from datetime import timedelta
from unittest.mock import Mock, patch

from conftest import points_of
from sheetapi.schemas.weekly_reward import WeeklyRewardStatus
from sheetapi.services.weekly_reward_scheduler import WeeklyRewardScheduler
from sheetapi.utils.date_utils import last_completed_week


def test_run_once_pays_last_week(db, session_factory, make_user, make_quiz, add_score):
    player = make_user("player")
    quiz = make_quiz(make_user("creator"))
    add_score(quiz, player, 9, last_completed_week().start + timedelta(hours=1))
    scheduler = WeeklyRewardScheduler(session_factory, interval_hours=6)

    first = scheduler.run_once()
    second = scheduler.run_once()

    assert first.status == WeeklyRewardStatus.PAID
    assert second.status == WeeklyRewardStatus.ALREADY_PAID
    assert points_of(db, player.id) == (1000, 1000)


def test_run_once_without_scores(session_factory):
    scheduler = WeeklyRewardScheduler(session_factory)

    assert scheduler.run_once().status == WeeklyRewardStatus.NO_SCORES


def test_tick_failure_is_logged_not_raised(session_factory):
    failing = Mock()
    failing.return_value.pay_weekly_reward.side_effect = RuntimeError("db down")
    scheduler = WeeklyRewardScheduler(session_factory, service_factory=failing)

    with patch("sheetapi.services.weekly_reward_scheduler.logger") as mock_logger:
        result = asyncio.run(scheduler.tick())

    assert result is None
    mock_logger.error.assert_called_once()
    assert "db down" in mock_logger.error.call_args[0][0]


def test_start_runs_immediately_and_stop_cancels(session_factory):
    service = Mock()
    service.return_value.pay_weekly_reward.return_value = Mock(
        period_key="2026-10-12", status=WeeklyRewardStatus.NO_SCORES
    )
    scheduler = WeeklyRewardScheduler(
        session_factory, interval_hours=24, service_factory=service
    )

    async def scenario():
        scheduler.start()
        assert scheduler.running
        for _ in range(100):
            if service.return_value.pay_weekly_reward.called:
                break
            await asyncio.sleep(0.01)
        await scheduler.stop()

    asyncio.run(scenario())

    assert service.return_value.pay_weekly_reward.call_count == 1
    assert not scheduler.running
