import logging
from typing import List

from sqlalchemy.orm import Session

from sheetapi.core.exceptions import (
    AccountNotFoundError,
    DuplicateResourceError,
    NotFoundError,
    ValidationError,
)
from sheetapi.repositories.follow_repository import FollowRepository
from sheetapi.repositories.user_repository import UserRepository
from sheetapi.schemas.follow import FollowUser

logger = logging.getLogger(__name__)


class FollowService:
    def __init__(self, db: Session):
        self.db = db
        self.follow_repo = FollowRepository(db)
        self.user_repo = UserRepository(db)

    def follow(self, follower_id: int, target_id: int) -> str:
        if follower_id == target_id:
            raise ValidationError("Cannot follow yourself", error_code="FOLLOW_002")

        target = self.user_repo.get_by_id(target_id)
        if target is None:
            raise AccountNotFoundError(target_id)

        if not self.follow_repo.add(follower_id, target_id):
            raise DuplicateResourceError(
                f"Already following {target.username}",
                details={"user_id": target_id},
            )

        logger.info(f"Follow: {follower_id} -> {target_id}")
        return f"Now following {target.username}"

    def unfollow(self, follower_id: int, target_id: int) -> str:
        if not self.follow_repo.remove(follower_id, target_id):
            raise NotFoundError(
                "Follow relation not found",
                details={"user_id": target_id},
                error_code="FOLLOW_404",
            )

        logger.info(f"Unfollow: {follower_id} -> {target_id}")
        return "Unfollowed"

    def is_following(self, follower_id: int, target_id: int) -> bool:
        return self.follow_repo.is_following(follower_id, target_id)

    def list_followers(self, user_id: int) -> List[FollowUser]:
        return self.follow_repo.list_followers(user_id)

    def list_following(self, user_id: int) -> List[FollowUser]:
        return self.follow_repo.list_following(user_id)
