from datetime import datetime, timedelta, timezone

import pytest

from conftest import points_of
from sheetapi.core.exceptions import AuthorizationError, NotFoundError
from sheetapi.models import PointTransaction, Quiz, QuizMode, QuizScore
from sheetapi.schemas.quiz import QuizCreateRequest, QuizScoreRequest
from sheetapi.services.quiz_service import QuizService

QUESTIONS = [
    {"question": "2 + 2?", "choices": ["3", "4"], "answer_index": 1},
    {"question": "3 * 3?", "choices": ["9", "6", "12"], "answer_index": 0},
]


@pytest.fixture
def quiz_service(db):
    return QuizService(db)


def test_create_and_get_quiz(quiz_service, make_user, subject):
    creator = make_user("creator")

    created = quiz_service.create_quiz(
        creator.id,
        QuizCreateRequest(title=" Arithmetic ", subject_id=subject.id, questions=QUESTIONS),
    )
    fetched = quiz_service.get_quiz(created.id)

    assert fetched.title == "Arithmetic"
    assert fetched.subject_name == "Math"
    assert fetched.creator_username == "creator"
    assert len(fetched.questions) == 2
    assert fetched.questions[1].answer_index == 0


def test_create_quiz_unknown_subject(quiz_service, make_user):
    creator = make_user("creator")

    with pytest.raises(NotFoundError):
        quiz_service.create_quiz(
            creator.id, QuizCreateRequest(title="X", subject_id=99, questions=QUESTIONS)
        )


def test_only_creator_can_update(quiz_service, make_user, make_quiz):
    creator = make_user("creator")
    other = make_user("other")
    quiz = make_quiz(creator)
    request = QuizCreateRequest(title="Renamed", questions=QUESTIONS)

    with pytest.raises(AuthorizationError):
        quiz_service.update_quiz(quiz.id, other.id, request)

    assert quiz_service.update_quiz(quiz.id, creator.id, request).title == "Renamed"


def test_submit_score_records_and_rewards_creator(db, quiz_service, make_user, make_quiz):
    creator = make_user("creator")
    player = make_user("player")
    quiz = make_quiz(creator)

    response = quiz_service.submit_score(
        quiz.id, player.id, QuizScoreRequest(score=80, mode=QuizMode.SPEED)
    )

    assert response.score == 80
    assert db.query(QuizScore).one().mode == "speed"
    assert db.query(Quiz.play_count).filter(Quiz.id == quiz.id).scalar() == 1
    assert points_of(db, creator.id) == (100, 100)


def test_submit_score_own_quiz_no_reward(db, quiz_service, make_user, make_quiz):
    creator = make_user("creator")
    quiz = make_quiz(creator)

    quiz_service.submit_score(quiz.id, creator.id, QuizScoreRequest(score=5, mode=QuizMode.QUIZ))

    assert db.query(QuizScore).count() == 1
    assert db.query(PointTransaction).count() == 0
    assert points_of(db, creator.id) == (0, 0)


def test_submit_score_missing_quiz(quiz_service, make_user):
    player = make_user("player")

    with pytest.raises(NotFoundError):
        quiz_service.submit_score(404, player.id, QuizScoreRequest(score=1, mode=QuizMode.MATCH))


def test_weekly_leaderboard_uses_trailing_seven_days(
    quiz_service, make_user, make_quiz, add_score, fixed_now
):
    creator = make_user("creator")
    quiz = make_quiz(creator)
    players = [make_user(f"p{i}") for i in range(12)]
    for i, player in enumerate(players):
        add_score(quiz, player, 10 + i, fixed_now - timedelta(days=2))
    add_score(quiz, players[0], 5, fixed_now - timedelta(days=1))
    add_score(quiz, players[0], 1000, fixed_now - timedelta(days=10))

    board = quiz_service.weekly_leaderboard(now=fixed_now)

    assert len(board) == 10
    assert board[0].username == "p11"
    assert board[0].total_score == 21
    assert [row.total_score for row in board] == sorted(
        (row.total_score for row in board), reverse=True
    )
    totals = {row.username: row.total_score for row in board}
    # 10일 전 점수는 제외
    assert totals["p0"] == 15
    assert "p1" not in totals and "p2" not in totals


def test_leaderboard_counts_games(quiz_service, make_user, make_quiz, add_score, fixed_now):
    creator = make_user("creator")
    quiz = make_quiz(creator)
    player = make_user("player")
    played = fixed_now - timedelta(hours=3)
    add_score(quiz, player, 7, played)
    add_score(quiz, player, 8, played)

    (row,) = quiz_service.weekly_leaderboard(now=fixed_now)

    assert row.user_id == player.id
    assert row.total_score == 15
    assert row.games_played == 2
    assert row.model_dump(by_alias=True) == {
        "userId": player.id,
        "username": "player",
        "totalScore": 15,
        "gamesPlayed": 2,
    }
