import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from sheetapi.core.exceptions import (
    AccountNotFoundError,
    DuplicateResourceError,
    NotFoundError,
)
from sheetapi.models.worksheet import Worksheet
from sheetapi.repositories.user_repository import UserRepository
from sheetapi.repositories.view_repository import ViewRepository
from sheetapi.repositories.worksheet_repository import (
    SubjectRepository,
    WorksheetRepository,
)
from sheetapi.schemas.quiz import QuizSummary
from sheetapi.schemas.user import AccountCreateResponse, User
from sheetapi.schemas.weekly_reward import WeeklyRewardResult
from sheetapi.services.point_service import PointService
from sheetapi.services.quiz_service import QuizService
from sheetapi.services.weekly_reward_service import WeeklyRewardService

logger = logging.getLogger(__name__)


class AdminService:
    """관리자 전용 작업 - 계정, 포인트, 과목, 학습지 조회수, 퀴즈, 주간 보상"""

    def __init__(self, db: Session, point_service: Optional[PointService] = None):
        self.db = db
        self.user_repo = UserRepository(db)
        self.worksheet_repo = WorksheetRepository(db)
        self.subject_repo = SubjectRepository(db)
        self.view_repo = ViewRepository(db)
        self.point_service = point_service or PointService(db)
        self.quiz_service = QuizService(db, point_service=self.point_service)
        self.weekly_reward_service = WeeklyRewardService(
            db, point_service=self.point_service
        )

    # Accounts

    def create_account(self, username: str) -> AccountCreateResponse:
        """계정 생성 (비밀번호는 사용자가 최초 로그인 시 설정)"""
        if self.user_repo.username_exists(username):
            raise DuplicateResourceError(
                f"Username already exists: {username}", details={"username": username}
            )

        user = self.user_repo.create_user(username=username)
        logger.info(f"Account created by admin: id={user.id} username={username}")
        return AccountCreateResponse(
            message=f"Account {username} created", user=user
        )

    def list_accounts(self) -> List[User]:
        return self.user_repo.list_users()

    def delete_account(self, user_id: int) -> str:
        user = self.user_repo.get_by_id(user_id)
        if user is None:
            raise AccountNotFoundError(user_id)

        self.user_repo.delete(user_id)
        # 작성 학습지, 팔로우, 조회 기록은 DB 의 ON DELETE CASCADE 로 정리된다
        self.db.expire_all()
        logger.info(f"Account deleted: id={user_id} username={user.username}")
        return f"Account {user.username} deleted"

    def adjust_points(
        self, user_id: int, amount: int, admin_id: Optional[int] = None
    ) -> int:
        return self.point_service.admin_adjust(user_id, amount, admin_id=admin_id)

    # Worksheets

    def _get_worksheet_or_404(self, worksheet_id: int) -> Worksheet:
        worksheet = self.db.get(Worksheet, worksheet_id)
        if worksheet is None:
            raise NotFoundError(
                f"Worksheet not found: {worksheet_id}",
                details={"worksheet_id": worksheet_id},
                error_code="WORKSHEET_404",
            )
        return worksheet

    def set_worksheet_views(self, worksheet_id: int, views: int) -> int:
        """조회수 카운터 직접 수정 (포인트와 조회 기록은 변경하지 않음)"""
        self._get_worksheet_or_404(worksheet_id)
        updated = self.worksheet_repo.update(worksheet_id, views=views)
        logger.info(f"Worksheet views set: id={worksheet_id} views={views}")
        return updated.views

    def delete_worksheet(self, worksheet_id: int) -> str:
        """학습지와 조회 기록 삭제"""
        worksheet = self._get_worksheet_or_404(worksheet_id)
        title = worksheet.title
        try:
            removed = self.view_repo.delete_for_worksheet(worksheet_id)
            self.worksheet_repo.delete(worksheet_id, commit=False)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            f"Worksheet deleted: id={worksheet_id} view_records={removed}"
        )
        return f'Worksheet "{title}" deleted'

    # Subjects

    def delete_subject(self, subject_id: int) -> str:
        """과목과 소속 학습지, 그 조회 기록을 한 트랜잭션으로 삭제"""
        subject = self.subject_repo.get_by_id(subject_id)
        if subject is None:
            raise NotFoundError(
                f"Subject not found: {subject_id}",
                details={"subject_id": subject_id},
                error_code="SUBJECT_404",
            )

        try:
            removed_views = self.view_repo.delete_for_subject(subject_id)
            removed_worksheets = self.worksheet_repo.delete_for_subject(subject_id)
            self.subject_repo.delete(subject_id, commit=False)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.expire_all()

        logger.info(
            f"Subject deleted: id={subject_id} worksheets={removed_worksheets} view_records={removed_views}"
        )
        return f'Subject "{subject.name}" and its worksheets deleted'

    # Quizzes

    def list_quizzes(self) -> List[QuizSummary]:
        return self.quiz_service.list_quizzes()

    def delete_quiz(self, quiz_id: int) -> str:
        self.quiz_service.delete_quiz(quiz_id)
        return "Quiz deleted"

    # Weekly reward

    def run_weekly_reward(self) -> WeeklyRewardResult:
        result = self.weekly_reward_service.pay_weekly_reward()
        logger.info(
            f"Weekly reward triggered manually: period={result.period_key} status={result.status.value}"
        )
        return result
