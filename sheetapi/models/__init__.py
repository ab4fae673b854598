from .base import Base
from .user import User, UserRole
from .follow import Follow
from .worksheet import Subject, Worksheet, WorksheetView
from .points import PointTransaction, TransactionType
from .quiz import Quiz, QuizMode, QuizScore
from .weekly_reward import WeeklyRewardMarker

__all__ = [
    "Base",
    "User",
    "UserRole",
    "Follow",
    "Subject",
    "Worksheet",
    "WorksheetView",
    "PointTransaction",
    "TransactionType",
    "Quiz",
    "QuizMode",
    "QuizScore",
    "WeeklyRewardMarker",
]
