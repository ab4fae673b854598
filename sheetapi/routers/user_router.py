from typing import List

from fastapi import APIRouter, Depends

from sheetapi.core.auth_middleware import get_current_active_user
from sheetapi.deps import get_user_service
from sheetapi.schemas.user import (
    PublicUserProfile,
    User as UserSchema,
    UserListItem,
    UserProfile,
)
from sheetapi.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[UserListItem])
def list_users(
    current_user: UserSchema = Depends(get_current_active_user),
    user_service: UserService = Depends(get_user_service),
) -> List[UserListItem]:
    """나를 제외한 전체 사용자 (팔로우/팔로워 여부 포함)"""
    return user_service.list_users(current_user.id)


@router.get("/classmates", response_model=List[UserListItem])
def list_classmates(
    current_user: UserSchema = Depends(get_current_active_user),
    user_service: UserService = Depends(get_user_service),
) -> List[UserListItem]:
    """관리자 계정을 제외한 사용자 목록"""
    return user_service.list_users(current_user.id, exclude_admins=True)


@router.get("/me", response_model=UserProfile)
def get_my_profile(
    current_user: UserSchema = Depends(get_current_active_user),
    user_service: UserService = Depends(get_user_service),
) -> UserProfile:
    """내 프로필 (팔로워/팔로잉 수, 인기 학습지)"""
    return user_service.get_profile(current_user.id)


@router.get("/{user_id}", response_model=PublicUserProfile)
def get_user_profile(
    user_id: int,
    current_user: UserSchema = Depends(get_current_active_user),
    user_service: UserService = Depends(get_user_service),
) -> PublicUserProfile:
    return user_service.get_public_profile(user_id, current_user.id)
