from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from sheetapi.models.user import UserRole


class User(BaseModel):
    id: int
    username: str
    is_active: bool = True
    role: UserRole = UserRole.USER
    points: int = 0
    total_earned: int = 0
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @property
    def is_admin(self) -> bool:
        return UserRole.is_admin(self.role)


class AccountCreateRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=100, description="계정 이름")

    @field_validator("username")
    @classmethod
    def username_must_not_be_blank(cls, v: str) -> str:
        if v.strip() == "":
            raise ValueError("Username cannot be empty")
        return v.strip()


class AccountCreateResponse(BaseModel):
    message: str
    user: User


class ProfileWorksheet(BaseModel):
    id: int
    title: str
    views: int
    subject_name: Optional[str] = None


class UserProfile(BaseModel):
    user: User
    follower_count: int = Field(..., alias="followerCount")
    following_count: int = Field(..., alias="followingCount")
    top_worksheets: List[ProfileWorksheet] = Field(
        default_factory=list, alias="topWorksheets"
    )

    class Config:
        populate_by_name = True


class PublicUserProfile(UserProfile):
    """다른 사용자 프로필 - 조회자의 팔로우 여부 포함"""

    is_following: bool = Field(..., alias="isFollowing")


class UserListItem(BaseModel):
    id: int
    username: str
    points: int = 0
    is_following: bool = False
    is_follower: bool = False
