from typing import List, Set

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sheetapi.models.follow import Follow
from sheetapi.models.user import User as UserModel
from sheetapi.repositories.base import BaseRepository
from sheetapi.schemas.follow import FollowSchema, FollowUser


class FollowRepository(BaseRepository[Follow, FollowSchema]):
    def __init__(self, db: Session):
        super().__init__(Follow, FollowSchema, db)

    def is_following(self, follower_id: int, following_id: int) -> bool:
        return self.exists({"follower_id": follower_id, "following_id": following_id})

    def add(self, follower_id: int, following_id: int) -> bool:
        """팔로우 추가. 이미 존재하면 False"""
        self._ensure_clean_session()
        self.db.add(Follow(follower_id=follower_id, following_id=following_id))
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            return False
        return True

    def remove(self, follower_id: int, following_id: int) -> bool:
        self._ensure_clean_session()
        deleted = (
            self.db.query(Follow)
            .filter(
                Follow.follower_id == follower_id,
                Follow.following_id == following_id,
            )
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted > 0

    def following_ids(self, follower_id: int) -> Set[int]:
        self._ensure_clean_session()
        rows = (
            self.db.query(Follow.following_id)
            .filter(Follow.follower_id == follower_id)
            .all()
        )
        return {row[0] for row in rows}

    def follower_ids(self, user_id: int) -> Set[int]:
        self._ensure_clean_session()
        rows = (
            self.db.query(Follow.follower_id)
            .filter(Follow.following_id == user_id)
            .all()
        )
        return {row[0] for row in rows}

    def list_followers(self, user_id: int) -> List[FollowUser]:
        """user_id 를 팔로우하는 사용자 목록 (맞팔 여부 포함)"""
        self._ensure_clean_session()
        users = (
            self.db.query(UserModel)
            .join(Follow, Follow.follower_id == UserModel.id)
            .filter(Follow.following_id == user_id)
            .order_by(UserModel.username)
            .all()
        )
        mine = self.following_ids(user_id)
        return [
            FollowUser(
                id=u.id, username=u.username, points=u.points, is_following=u.id in mine
            )
            for u in users
        ]

    def list_following(self, user_id: int) -> List[FollowUser]:
        self._ensure_clean_session()
        users = (
            self.db.query(UserModel)
            .join(Follow, Follow.following_id == UserModel.id)
            .filter(Follow.follower_id == user_id)
            .order_by(UserModel.username)
            .all()
        )
        return [
            FollowUser(id=u.id, username=u.username, points=u.points, is_following=True)
            for u in users
        ]

    def count_followers(self, user_id: int) -> int:
        return self.count({"following_id": user_id})

    def count_following(self, user_id: int) -> int:
        return self.count({"follower_id": user_id})
