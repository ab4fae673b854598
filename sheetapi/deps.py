from fastapi import Depends
from sqlalchemy.orm import Session

from sheetapi.database.session import get_db

# Services
from sheetapi.services.admin_service import AdminService
from sheetapi.services.follow_service import FollowService
from sheetapi.services.point_service import PointService
from sheetapi.services.quiz_service import QuizService
from sheetapi.services.user_service import UserService
from sheetapi.services.weekly_reward_service import WeeklyRewardService
from sheetapi.services.worksheet_service import WorksheetService


def get_point_service(db: Session = Depends(get_db)) -> PointService:
    return PointService(db=db)


def get_worksheet_service(db: Session = Depends(get_db)) -> WorksheetService:
    return WorksheetService(db=db)


def get_quiz_service(db: Session = Depends(get_db)) -> QuizService:
    return QuizService(db=db)


def get_follow_service(db: Session = Depends(get_db)) -> FollowService:
    return FollowService(db=db)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db=db)


def get_weekly_reward_service(db: Session = Depends(get_db)) -> WeeklyRewardService:
    return WeeklyRewardService(db=db)


def get_admin_service(db: Session = Depends(get_db)) -> AdminService:
    return AdminService(db=db)
