import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from sheetapi.core.auth_middleware import get_current_active_user
from sheetapi.deps import get_quiz_service
from sheetapi.schemas.quiz import (
    PlayerScoreTotal,
    QuizCreateRequest,
    QuizSchema,
    QuizScoreRequest,
    QuizScoreResponse,
    QuizSummary,
)
from sheetapi.schemas.user import User as UserSchema
from sheetapi.services.quiz_service import QuizService

router = APIRouter(prefix="/quizzes", tags=["quizzes"])
logger = logging.getLogger(__name__)


@router.get("/leaderboard/weekly", response_model=List[PlayerScoreTotal])
def weekly_leaderboard(
    current_user: UserSchema = Depends(get_current_active_user),
    quiz_service: QuizService = Depends(get_quiz_service),
) -> List[PlayerScoreTotal]:
    """최근 7일 점수 합계 상위 10명"""
    return quiz_service.weekly_leaderboard()


@router.post("", response_model=QuizSchema, status_code=status.HTTP_201_CREATED)
def create_quiz(
    request: QuizCreateRequest,
    current_user: UserSchema = Depends(get_current_active_user),
    quiz_service: QuizService = Depends(get_quiz_service),
) -> QuizSchema:
    return quiz_service.create_quiz(current_user.id, request)


@router.get("", response_model=List[QuizSummary])
def list_quizzes(
    subject_id: Optional[int] = Query(None),
    current_user: UserSchema = Depends(get_current_active_user),
    quiz_service: QuizService = Depends(get_quiz_service),
) -> List[QuizSummary]:
    return quiz_service.list_quizzes(subject_id=subject_id)


@router.get("/{quiz_id}", response_model=QuizSchema)
def get_quiz(
    quiz_id: int = Path(...),
    current_user: UserSchema = Depends(get_current_active_user),
    quiz_service: QuizService = Depends(get_quiz_service),
) -> QuizSchema:
    return quiz_service.get_quiz(quiz_id)


@router.put("/{quiz_id}", response_model=QuizSchema)
def update_quiz(
    request: QuizCreateRequest,
    quiz_id: int = Path(...),
    current_user: UserSchema = Depends(get_current_active_user),
    quiz_service: QuizService = Depends(get_quiz_service),
) -> QuizSchema:
    """출제자 본인만 수정 가능 (403)"""
    return quiz_service.update_quiz(quiz_id, current_user.id, request)


@router.post("/{quiz_id}/score", response_model=QuizScoreResponse)
def submit_score(
    request: QuizScoreRequest,
    quiz_id: int = Path(...),
    current_user: UserSchema = Depends(get_current_active_user),
    quiz_service: QuizService = Depends(get_quiz_service),
) -> QuizScoreResponse:
    """점수 기록 - 다른 사람의 퀴즈면 출제자에게 100pt"""
    return quiz_service.submit_score(quiz_id, current_user.id, request)
