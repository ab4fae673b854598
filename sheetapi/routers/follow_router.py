from typing import List

from fastapi import APIRouter, Depends, Path

from sheetapi.core.auth_middleware import get_current_active_user
from sheetapi.deps import get_follow_service
from sheetapi.schemas.common import MessageResponse
from sheetapi.schemas.follow import FollowUser
from sheetapi.schemas.user import User as UserSchema
from sheetapi.services.follow_service import FollowService

router = APIRouter(prefix="/follows", tags=["follows"])


@router.get("/followers", response_model=List[FollowUser])
def list_followers(
    current_user: UserSchema = Depends(get_current_active_user),
    follow_service: FollowService = Depends(get_follow_service),
) -> List[FollowUser]:
    return follow_service.list_followers(current_user.id)


@router.get("/following", response_model=List[FollowUser])
def list_following(
    current_user: UserSchema = Depends(get_current_active_user),
    follow_service: FollowService = Depends(get_follow_service),
) -> List[FollowUser]:
    return follow_service.list_following(current_user.id)


@router.post("/{user_id}", response_model=MessageResponse)
def follow_user(
    user_id: int = Path(..., description="팔로우할 사용자 ID"),
    current_user: UserSchema = Depends(get_current_active_user),
    follow_service: FollowService = Depends(get_follow_service),
) -> MessageResponse:
    return MessageResponse(message=follow_service.follow(current_user.id, user_id))


@router.delete("/{user_id}", response_model=MessageResponse)
def unfollow_user(
    user_id: int = Path(...),
    current_user: UserSchema = Depends(get_current_active_user),
    follow_service: FollowService = Depends(get_follow_service),
) -> MessageResponse:
    return MessageResponse(message=follow_service.unfollow(current_user.id, user_id))
