from typing import Optional

from pydantic import BaseModel


class FollowSchema(BaseModel):
    id: int
    follower_id: int
    following_id: int

    class Config:
        from_attributes = True


class FollowUser(BaseModel):
    id: int
    username: str
    points: int = 0
    is_following: Optional[bool] = None

    class Config:
        from_attributes = True
