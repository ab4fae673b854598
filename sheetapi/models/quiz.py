import enum
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, BigInteger, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sheetapi.models.base import Base, BaseModel, IdType, utc_now


class QuizMode(str, enum.Enum):
    QUIZ = "quiz"
    MATCH = "match"
    SPEED = "speed"


class Quiz(BaseModel):
    __tablename__ = "quizzes"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    subject_id: Mapped[Optional[int]] = mapped_column(
        BigInteger, ForeignKey("subjects.id", ondelete="SET NULL"), nullable=True
    )
    creator_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # [{"question": str, "choices": [str, ...], "answer_index": int}, ...]
    questions: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False)
    play_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    creator = relationship("User", lazy="joined")
    subject = relationship("Subject", lazy="joined")


class QuizScore(Base):
    """퀴즈 1회 플레이 기록 - 리더보드/주간 보상 집계 입력 전용"""

    __tablename__ = "quiz_scores"
    __table_args__ = (Index("idx_quiz_scores_played_at", "played_at", "player_id"),)

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    quiz_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False
    )
    player_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    mode: Mapped[str] = mapped_column(String(16), nullable=False)
    played_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
