from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from sheetapi.models.user import User as UserModel, UserRole
from sheetapi.repositories.base import BaseRepository
from sheetapi.schemas.user import User as UserSchema


class UserRepository(BaseRepository[UserModel, UserSchema]):
    """계정 리포지토리 - 잔액 변경은 조건부 UPDATE 한 문장으로 처리"""

    def __init__(self, db: Session):
        super().__init__(UserModel, UserSchema, db)

    def username_exists(self, username: str) -> bool:
        return self.exists({"username": username})

    def create_user(
        self,
        username: str,
        role: UserRole = UserRole.USER,
        is_active: bool = False,
        password_hash: Optional[str] = None,
        commit: bool = True,
    ) -> UserSchema:
        return self.create(
            commit=commit,
            username=username,
            role=role.value,
            is_active=is_active,
            password_hash=password_hash,
            points=0,
            total_earned=0,
        )

    def list_users(self) -> List[UserSchema]:
        self._ensure_clean_session()
        users = self.db.query(self.model_class).order_by(self.model_class.id).all()
        return [self._to_schema(u) for u in users]

    def list_others(self, exclude_id: int, exclude_admins: bool = False) -> List[UserSchema]:
        """exclude_id 를 제외한 계정 목록 (username 순)"""
        self._ensure_clean_session()
        query = self.db.query(self.model_class).filter(self.model_class.id != exclude_id)
        if exclude_admins:
            query = query.filter(self.model_class.role != UserRole.ADMIN.value)
        return [self._to_schema(u) for u in query.order_by(self.model_class.username).all()]

    def get_points(self, user_id: int) -> Optional[int]:
        self._ensure_clean_session()
        return (
            self.db.query(self.model_class.points)
            .filter(self.model_class.id == user_id)
            .scalar()
        )

    def credit(self, user_id: int, amount: int, earned: bool = True) -> bool:
        """잔액 증감 (earned=True 이면 누적 획득에도 반영)

        Returns:
            bool: 대상 계정이 존재해 갱신되었는지 여부
        """
        values = {"points": self.model_class.points + amount}
        if earned:
            values["total_earned"] = self.model_class.total_earned + amount

        result = self.db.execute(
            update(self.model_class)
            .where(self.model_class.id == user_id)
            .values(**values)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount == 1

    def debit_if_sufficient(self, user_id: int, total: int) -> bool:
        """잔액이 total 이상일 때만 차감 (compare-and-set)

        Returns:
            bool: 차감 성공 여부. False 이면 잔액 변화 없음
        """
        result = self.db.execute(
            update(self.model_class)
            .where(
                self.model_class.id == user_id,
                self.model_class.points >= total,
            )
            .values(points=self.model_class.points - total)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount == 1
