from typing import List, Optional

from sqlalchemy.orm import Session

from sheetapi.core.exceptions import AccountNotFoundError
from sheetapi.repositories.follow_repository import FollowRepository
from sheetapi.repositories.user_repository import UserRepository
from sheetapi.repositories.worksheet_repository import WorksheetRepository
from sheetapi.schemas.user import PublicUserProfile, UserListItem, UserProfile
from sheetapi.services.follow_service import FollowService


class UserService:
    def __init__(self, db: Session, follow_service: Optional[FollowService] = None):
        self.db = db
        self.user_repo = UserRepository(db)
        self.follow_repo = FollowRepository(db)
        self.worksheet_repo = WorksheetRepository(db)
        self.follow_service = follow_service or FollowService(db)

    def get_profile(self, user_id: int) -> UserProfile:
        """프로필 - 팔로워/팔로잉 수, 조회수 상위 학습지 3개"""
        user = self.user_repo.get_by_id(user_id)
        if user is None:
            raise AccountNotFoundError(user_id)

        return UserProfile(
            user=user,
            follower_count=self.follow_repo.count_followers(user_id),
            following_count=self.follow_repo.count_following(user_id),
            top_worksheets=self.worksheet_repo.top_by_uploader(user_id),
        )

    def get_public_profile(self, user_id: int, viewer_id: int) -> PublicUserProfile:
        profile = self.get_profile(user_id)
        return PublicUserProfile(
            **profile.model_dump(),
            is_following=self.follow_service.is_following(viewer_id, user_id),
        )

    def list_users(self, viewer_id: int, exclude_admins: bool = False) -> List[UserListItem]:
        """조회자를 제외한 사용자 목록과 서로의 팔로우 관계"""
        following = self.follow_repo.following_ids(viewer_id)
        followers = self.follow_repo.follower_ids(viewer_id)
        return [
            UserListItem(
                id=u.id,
                username=u.username,
                points=u.points,
                is_following=u.id in following,
                is_follower=u.id in followers,
            )
            for u in self.user_repo.list_others(viewer_id, exclude_admins=exclude_admins)
        ]
