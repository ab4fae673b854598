from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator


class SubjectSchema(BaseModel):
    id: int
    name: str
    thumbnail_url: Optional[str] = None
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SubjectCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    thumbnail_url: Optional[str] = None


class WorksheetSchema(BaseModel):
    id: int
    title: str
    subject_id: int
    subject_name: Optional[str] = None
    file_url: Optional[str] = None
    external_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    uploader_id: int
    uploader_username: Optional[str] = None
    views: int = 0
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class WorksheetCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    subject_id: int = Field(..., gt=0)
    file_url: Optional[str] = None
    external_url: Optional[str] = None
    thumbnail_url: Optional[str] = None

    @model_validator(mode="after")
    def require_location(self):
        if not self.file_url and not self.external_url:
            raise ValueError("Either file_url or external_url is required")
        return self


class WorksheetViewResponse(BaseModel):
    """학습지 상세 + 이번 조회가 보상으로 집계되었는지 여부"""

    worksheet: WorksheetSchema
    view_counted: bool = Field(..., alias="viewCounted")

    class Config:
        populate_by_name = True


WorksheetSort = Literal["recent", "views"]


class WorksheetViewsUpdateRequest(BaseModel):
    views: int = Field(..., ge=0)


class WorksheetViewsUpdateResponse(BaseModel):
    message: str
    views: int


class WorksheetViewRecord(BaseModel):
    id: int
    worksheet_id: int
    viewer_id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class WorksheetDownloadResponse(BaseModel):
    url: str


class WorksheetThumbnailUpdateRequest(BaseModel):
    thumbnail_url: str = Field(..., min_length=1)
