import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from sheetapi.core.exceptions import AuthorizationError, NotFoundError
from sheetapi.models.quiz import Quiz
from sheetapi.repositories.quiz_repository import QuizRepository, QuizScoreRepository
from sheetapi.repositories.worksheet_repository import SubjectRepository
from sheetapi.schemas.quiz import (
    PlayerScoreTotal,
    QuizCreateRequest,
    QuizSchema,
    QuizScoreRequest,
    QuizScoreResponse,
    QuizSummary,
)
from sheetapi.services.point_service import PointService
from sheetapi.utils.date_utils import trailing_days

logger = logging.getLogger(__name__)

LEADERBOARD_SIZE = 10


class QuizService:
    def __init__(self, db: Session, point_service: Optional[PointService] = None):
        self.db = db
        self.quiz_repo = QuizRepository(db)
        self.score_repo = QuizScoreRepository(db)
        self.subject_repo = SubjectRepository(db)
        self.point_service = point_service or PointService(db)

    def _get_model_or_404(self, quiz_id: int) -> Quiz:
        quiz = self.db.get(Quiz, quiz_id)
        if quiz is None:
            raise NotFoundError(
                f"Quiz not found: {quiz_id}",
                details={"quiz_id": quiz_id},
                error_code="QUIZ_404",
            )
        return quiz

    def _check_subject(self, subject_id: Optional[int]) -> None:
        if subject_id is not None and self.subject_repo.get_by_id(subject_id) is None:
            raise NotFoundError(
                f"Subject not found: {subject_id}",
                details={"subject_id": subject_id},
                error_code="SUBJECT_404",
            )

    def create_quiz(self, creator_id: int, request: QuizCreateRequest) -> QuizSchema:
        self._check_subject(request.subject_id)
        quiz = self.quiz_repo.create(
            title=request.title.strip(),
            subject_id=request.subject_id,
            creator_id=creator_id,
            questions=[q.model_dump() for q in request.questions],
            play_count=0,
        )
        logger.info(f"Quiz created: id={quiz.id} creator={creator_id}")
        return quiz

    def list_quizzes(self, subject_id: Optional[int] = None) -> List[QuizSummary]:
        return self.quiz_repo.list_quizzes(subject_id=subject_id)

    def get_quiz(self, quiz_id: int) -> QuizSchema:
        return self.quiz_repo._to_schema(self._get_model_or_404(quiz_id))

    def update_quiz(
        self, quiz_id: int, editor_id: int, request: QuizCreateRequest
    ) -> QuizSchema:
        """출제자 본인만 수정 가능"""
        quiz = self._get_model_or_404(quiz_id)
        if quiz.creator_id != editor_id:
            raise AuthorizationError("Only the quiz creator can edit this quiz")

        self._check_subject(request.subject_id)
        updated = self.quiz_repo.update(
            quiz_id,
            title=request.title.strip(),
            subject_id=request.subject_id,
            questions=[q.model_dump() for q in request.questions],
        )
        logger.info(f"Quiz updated: id={quiz_id} by={editor_id}")
        return updated

    def submit_score(
        self, quiz_id: int, player_id: int, request: QuizScoreRequest
    ) -> QuizScoreResponse:
        """점수 기록 + 플레이 수 증가 + 출제자 보상 (하나의 트랜잭션)"""
        quiz = self._get_model_or_404(quiz_id)

        try:
            self.score_repo.add_score(
                quiz_id=quiz_id,
                player_id=player_id,
                score=request.score,
                mode=request.mode.value,
            )
            self.quiz_repo.increment_play_count(quiz_id)
            self.point_service.quiz_play_reward(quiz, player_id, commit=False)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            f"Quiz score recorded: quiz={quiz_id} player={player_id} score={request.score} mode={request.mode.value}"
        )
        return QuizScoreResponse(message="Score recorded", score=request.score)

    def weekly_leaderboard(self, now: Optional[datetime] = None) -> List[PlayerScoreTotal]:
        """최근 7일 점수 합계 상위 10명"""
        window = trailing_days(7, now=now)
        return self.score_repo.totals_between(
            window.start, window.end, limit=LEADERBOARD_SIZE
        )

    def delete_quiz(self, quiz_id: int) -> None:
        self._get_model_or_404(quiz_id)
        self.quiz_repo.delete(quiz_id)
        logger.info(f"Quiz deleted: id={quiz_id}")
