from typing import Optional

from sqlalchemy import BigInteger, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.schema import UniqueConstraint

from sheetapi.models.base import BaseModel, IdType


class Subject(BaseModel):
    __tablename__ = "subjects"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    thumbnail_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_by: Mapped[Optional[int]] = mapped_column(
        BigInteger, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )


class Worksheet(BaseModel):
    """
    학습지 메타데이터

    파일 자체는 외부 스토리지(Cloudinary / Google Drive)에 있고
    여기에는 URL 만 저장한다.
    """

    __tablename__ = "worksheets"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    subject_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("subjects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    file_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    external_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    thumbnail_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    uploader_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    subject = relationship("Subject", lazy="joined")
    uploader = relationship("User", lazy="joined")


class WorksheetView(BaseModel):
    """
    조회 기록 - (worksheet, viewer) 당 최대 1건

    유니크 제약이 "보상 지급 여부"의 유일한 판정 기준이다.
    """

    __tablename__ = "worksheet_views"
    __table_args__ = (
        UniqueConstraint("worksheet_id", "viewer_id", name="uq_worksheet_viewer"),
    )

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    worksheet_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("worksheets.id", ondelete="CASCADE"), nullable=False
    )
    viewer_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
