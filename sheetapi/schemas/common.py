from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """단순 메시지 응답"""

    message: str = Field(..., description="결과 메시지")
