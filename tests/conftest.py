from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from sheetapi.core.security import create_access_token
from sheetapi.database.connection import enable_sqlite_foreign_keys
from sheetapi.database.session import get_db
from sheetapi.main import app
from sheetapi.models import (
    Base,
    Follow,
    Quiz,
    QuizScore,
    Subject,
    User,
    UserRole,
    Worksheet,
)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(
        bind=engine, autocommit=False, autoflush=False, expire_on_commit=False
    )


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def make_user(db):
    def _make(username, points=0, role=UserRole.USER, is_active=True):
        user = User(
            username=username,
            points=points,
            total_earned=0,
            role=role.value,
            is_active=is_active,
        )
        db.add(user)
        db.commit()
        return user

    return _make


@pytest.fixture
def follow(db):
    def _follow(follower, target):
        db.add(Follow(follower_id=follower.id, following_id=target.id))
        db.commit()

    return _follow


@pytest.fixture
def subject(db):
    s = Subject(name="Math")
    db.add(s)
    db.commit()
    return s


@pytest.fixture
def make_worksheet(db, subject):
    def _make(uploader, title="Fractions drill"):
        worksheet = Worksheet(
            title=title,
            subject_id=subject.id,
            file_url="https://files.example.com/ws.pdf",
            uploader_id=uploader.id,
            views=0,
        )
        db.add(worksheet)
        db.commit()
        return worksheet

    return _make


@pytest.fixture
def make_quiz(db):
    def _make(creator, title="Capitals"):
        quiz = Quiz(
            title=title,
            creator_id=creator.id,
            questions=[
                {"question": "Capital of France?", "choices": ["Paris", "Rome"], "answer_index": 0},
                {"question": "Capital of Italy?", "choices": ["Paris", "Rome"], "answer_index": 1},
            ],
            play_count=0,
        )
        db.add(quiz)
        db.commit()
        return quiz

    return _make


@pytest.fixture
def add_score(db):
    def _add(quiz, player, score, played_at, mode="quiz"):
        db.add(
            QuizScore(
                quiz_id=quiz.id,
                player_id=player.id,
                score=score,
                mode=mode,
                played_at=played_at,
            )
        )
        db.commit()

    return _add


def points_of(db, user_id):
    """DB 에서 직접 현재 잔액/누적 획득을 읽는다"""
    return (
        db.query(User.points, User.total_earned).filter(User.id == user_id).one()
    )


@pytest.fixture
def fixed_now():
    # 2026-10-21 12:00 KST (수요일)
    return datetime(2026, 10, 21, 3, 0, tzinfo=timezone.utc)


# ----------------------------------------------------------------------------
# HTTP
# ----------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def clear_overrides():
    app.dependency_overrides.clear()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    return TestClient(app)


def auth_headers(user):
    token = create_access_token({"user_id": user.id})
    return {"Authorization": f"Bearer {token}"}
