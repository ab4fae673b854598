from datetime import datetime
from typing import List, Optional

from sqlalchemy import desc, func, update
from sqlalchemy.orm import Session

from sheetapi.models.quiz import Quiz, QuizScore
from sheetapi.models.user import User as UserModel
from sheetapi.repositories.base import BaseRepository
from sheetapi.schemas.quiz import (
    PlayerScoreTotal,
    QuizSchema,
    QuizScoreSchema,
    QuizSummary,
)


class QuizRepository(BaseRepository[Quiz, QuizSchema]):
    def __init__(self, db: Session):
        super().__init__(Quiz, QuizSchema, db)

    def _to_schema(self, model_instance) -> Optional[QuizSchema]:
        if model_instance is None:
            return None

        return QuizSchema(
            id=model_instance.id,
            title=model_instance.title,
            subject_id=model_instance.subject_id,
            subject_name=model_instance.subject.name if model_instance.subject else None,
            creator_id=model_instance.creator_id,
            creator_username=(
                model_instance.creator.username if model_instance.creator else None
            ),
            questions=model_instance.questions,
            play_count=model_instance.play_count,
            created_at=model_instance.created_at,
        )

    def _to_summary(self, quiz: Quiz) -> QuizSummary:
        return QuizSummary(
            id=quiz.id,
            title=quiz.title,
            subject_id=quiz.subject_id,
            subject_name=quiz.subject.name if quiz.subject else None,
            creator_id=quiz.creator_id,
            creator_username=quiz.creator.username if quiz.creator else None,
            question_count=len(quiz.questions or []),
            play_count=quiz.play_count,
            created_at=quiz.created_at,
        )

    def list_quizzes(self, subject_id: Optional[int] = None) -> List[QuizSummary]:
        self._ensure_clean_session()
        query = self.db.query(Quiz)
        if subject_id is not None:
            query = query.filter(Quiz.subject_id == subject_id)
        rows = query.order_by(desc(Quiz.created_at), desc(Quiz.id)).all()
        return [self._to_summary(q) for q in rows]

    def increment_play_count(self, quiz_id: int) -> None:
        self.db.execute(
            update(Quiz)
            .where(Quiz.id == quiz_id)
            .values(play_count=Quiz.play_count + 1)
            .execution_options(synchronize_session="fetch")
        )


class QuizScoreRepository(BaseRepository[QuizScore, QuizScoreSchema]):
    def __init__(self, db: Session):
        super().__init__(QuizScore, QuizScoreSchema, db)

    def add_score(
        self, quiz_id: int, player_id: int, score: int, mode: str
    ) -> QuizScoreSchema:
        """점수 기록 (flush 만 수행)"""
        return self.create(
            commit=False, quiz_id=quiz_id, player_id=player_id, score=score, mode=mode
        )

    def totals_between(
        self, start: datetime, end: datetime, limit: Optional[int] = None
    ) -> List[PlayerScoreTotal]:
        """[start, end) 구간 플레이어별 점수 합계

        정렬: 합계 내림차순, 동점이면 player_id 오름차순
        """
        self._ensure_clean_session()
        total = func.sum(QuizScore.score).label("total_score")
        games = func.count(QuizScore.id).label("games_played")
        query = (
            self.db.query(QuizScore.player_id, UserModel.username, total, games)
            .join(UserModel, UserModel.id == QuizScore.player_id)
            .filter(QuizScore.played_at >= start, QuizScore.played_at < end)
            .group_by(QuizScore.player_id, UserModel.username)
            .order_by(desc(total), QuizScore.player_id)
        )
        if limit:
            query = query.limit(limit)

        return [
            PlayerScoreTotal(
                user_id=row.player_id,
                username=row.username,
                total_score=int(row.total_score or 0),
                games_played=int(row.games_played),
            )
            for row in query.all()
        ]
