from dependency_injector import containers, providers

from sheetapi.config import Settings
from sheetapi.database.connection import SessionLocal
from sheetapi.services.weekly_reward_scheduler import WeeklyRewardScheduler
from sheetapi.services.weekly_reward_service import WeeklyRewardService


class ConfigModule(containers.DeclarativeContainer):
    """Application configuration."""

    config = providers.Singleton(Settings)


class DatabaseModule(containers.DeclarativeContainer):
    """Session factory shared by background jobs."""

    session_factory = providers.Object(SessionLocal)


class SchedulerModule(containers.DeclarativeContainer):
    """Background jobs owned by the application lifespan."""

    config = providers.DependenciesContainer()
    database = providers.DependenciesContainer()

    weekly_reward_scheduler = providers.Singleton(
        WeeklyRewardScheduler,
        session_factory=database.session_factory,
        interval_hours=config.config.provided.WEEKLY_REWARD_INTERVAL_HOURS,
        service_factory=providers.Object(WeeklyRewardService),
    )


class Container(containers.DeclarativeContainer):
    """Application container."""

    config = providers.Container(ConfigModule)
    database = providers.Container(DatabaseModule)
    schedulers = providers.Container(
        SchedulerModule, config=config, database=database
    )
