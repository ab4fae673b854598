from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from sheetapi.models.quiz import QuizMode


class QuizQuestion(BaseModel):
    question: str = Field(..., min_length=1)
    choices: List[str] = Field(..., min_length=2)
    answer_index: int = Field(..., ge=0)

    @model_validator(mode="after")
    def answer_in_range(self):
        if self.answer_index >= len(self.choices):
            raise ValueError("answer_index is out of range")
        return self


class QuizCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    subject_id: Optional[int] = None
    questions: List[QuizQuestion] = Field(..., min_length=2)


class QuizSchema(BaseModel):
    id: int
    title: str
    subject_id: Optional[int] = None
    subject_name: Optional[str] = None
    creator_id: int
    creator_username: Optional[str] = None
    questions: List[QuizQuestion]
    play_count: int = 0
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class QuizSummary(BaseModel):
    id: int
    title: str
    subject_id: Optional[int] = None
    subject_name: Optional[str] = None
    creator_id: int
    creator_username: Optional[str] = None
    question_count: int
    play_count: int = 0
    created_at: Optional[datetime] = None


class QuizScoreRequest(BaseModel):
    score: int = Field(..., ge=0)
    mode: QuizMode


class QuizScoreResponse(BaseModel):
    message: str
    score: int


class QuizScoreSchema(BaseModel):
    id: int
    quiz_id: int
    player_id: int
    score: int
    mode: str
    played_at: datetime

    class Config:
        from_attributes = True


class PlayerScoreTotal(BaseModel):
    """기간 내 플레이어별 점수 집계"""

    user_id: int = Field(..., alias="userId")
    username: str
    total_score: int = Field(..., alias="totalScore")
    games_played: int = Field(..., alias="gamesPlayed")

    class Config:
        populate_by_name = True
