from enum import Enum
from typing import Optional, Union

from sqlalchemy import BigInteger, Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from sheetapi.models.base import BaseModel, IdType


class UserRole(str, Enum):
    """사용자 역할 정의"""

    USER = "user"  # 일반 사용자
    ADMIN = "admin"  # 관리자

    @classmethod
    def is_admin(cls, role: Union[str, "UserRole"]) -> bool:
        if isinstance(role, cls):
            role = role.value
        return role == cls.ADMIN.value


class User(BaseModel):
    """
    계정 테이블

    points / total_earned 는 PointService 를 통해서만 변경된다.
    points 는 모델 차원에서 음수를 막지 않는다 (관리자 차감 허용).
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    password_hash: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    role: Mapped[str] = mapped_column(String(20), default=UserRole.USER.value, nullable=False)

    # 현재 잔액
    points: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    # 누적 획득 포인트 (차감/전송으로 줄어들지 않음)
    total_earned: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username}, points={self.points})>"

    @property
    def is_admin(self) -> bool:
        return UserRole.is_admin(str(self.role))
