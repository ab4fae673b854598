from .user import User
from .points import PointTransactionEntry, TransferRequest, TransferResult
from .worksheet import SubjectSchema, WorksheetSchema, WorksheetViewResponse
from .quiz import QuizSchema, QuizScoreSchema, PlayerScoreTotal
from .weekly_reward import WeeklyRewardResult, WeeklyRewardStatus
