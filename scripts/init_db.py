"""
데이터베이스 초기화 스크립트

    python scripts/init_db.py                 # 테이블 생성
    python scripts/init_db.py --admin admin   # 테이블 생성 + 관리자 계정/토큰 발급
"""

import argparse
import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sheetapi.config import settings  # noqa: E402
from sheetapi.core.security import create_access_token  # noqa: E402
from sheetapi.database.connection import SessionLocal, engine  # noqa: E402
from sheetapi.models import Base, User, UserRole  # noqa: E402


def init_db():
    """테이블 생성"""
    try:
        Base.metadata.create_all(bind=engine)
        print(f"Database initialized: {settings.database_url.split('@')[-1]}")
    except Exception as e:
        print(f"Database initialization failed: {str(e)}")
        raise


def ensure_admin(username: str) -> str:
    """관리자 계정이 없으면 만들고 접근 토큰을 반환"""
    db = SessionLocal()
    try:
        user = db.query(User).filter(User.username == username).first()
        if user is None:
            user = User(
                username=username, role=UserRole.ADMIN.value, is_active=True
            )
            db.add(user)
            db.commit()
            print(f"Admin account created: {username} (id={user.id})")
        return create_access_token({"user_id": user.id})
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--admin", help="관리자 계정 이름")
    args = parser.parse_args()

    init_db()
    if args.admin:
        print(f"Access token: {ensure_admin(args.admin)}")
