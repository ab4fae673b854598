import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from sheetapi.core.exceptions import (
    AuthorizationError,
    DuplicateResourceError,
    NotFoundError,
)
from sheetapi.repositories.worksheet_repository import (
    SubjectRepository,
    WorksheetRepository,
)
from sheetapi.schemas.worksheet import (
    SubjectCreateRequest,
    SubjectSchema,
    WorksheetCreateRequest,
    WorksheetDownloadResponse,
    WorksheetSchema,
    WorksheetViewResponse,
)
from sheetapi.services.point_service import PointService

logger = logging.getLogger(__name__)


class WorksheetService:
    """학습지/과목 관리 서비스. 파일 업로드 자체는 외부 스토리지가 담당한다."""

    def __init__(self, db: Session, point_service: Optional[PointService] = None):
        self.db = db
        self.worksheet_repo = WorksheetRepository(db)
        self.subject_repo = SubjectRepository(db)
        self.point_service = point_service or PointService(db)

    # ------------------------------------------------------------------
    # Subjects
    # ------------------------------------------------------------------

    def list_subjects(self) -> List[SubjectSchema]:
        return self.subject_repo.list_subjects()

    def create_subject(
        self, request: SubjectCreateRequest, created_by: Optional[int] = None
    ) -> SubjectSchema:
        name = request.name.strip()
        if self.subject_repo.get_by_name(name):
            raise DuplicateResourceError(
                f"Subject already exists: {name}", details={"name": name}
            )

        subject = self.subject_repo.create(
            name=name, thumbnail_url=request.thumbnail_url, created_by=created_by
        )
        logger.info(f"Subject created: id={subject.id} name={name}")
        return subject

    def _get_subject_or_404(self, subject_id: int) -> SubjectSchema:
        subject = self.subject_repo.get_by_id(subject_id)
        if subject is None:
            raise NotFoundError(
                f"Subject not found: {subject_id}",
                details={"subject_id": subject_id},
                error_code="SUBJECT_404",
            )
        return subject

    # ------------------------------------------------------------------
    # Worksheets
    # ------------------------------------------------------------------

    def list_worksheets(
        self, subject_id: Optional[int] = None, sort: str = "recent"
    ) -> List[WorksheetSchema]:
        return self.worksheet_repo.list_worksheets(subject_id=subject_id, sort=sort)

    def create_worksheet(
        self, uploader_id: int, request: WorksheetCreateRequest
    ) -> WorksheetSchema:
        self._get_subject_or_404(request.subject_id)

        worksheet = self.worksheet_repo.create(
            title=request.title.strip(),
            subject_id=request.subject_id,
            file_url=request.file_url,
            external_url=request.external_url,
            thumbnail_url=request.thumbnail_url,
            uploader_id=uploader_id,
            views=0,
        )
        logger.info(f"Worksheet created: id={worksheet.id} uploader={uploader_id}")
        return worksheet

    def get_worksheet(self, worksheet_id: int) -> WorksheetSchema:
        worksheet = self.worksheet_repo.get_by_id(worksheet_id)
        if worksheet is None:
            raise NotFoundError(
                f"Worksheet not found: {worksheet_id}",
                details={"worksheet_id": worksheet_id},
                error_code="WORKSHEET_404",
            )
        return worksheet

    def view_worksheet(self, worksheet_id: int, viewer_id: int) -> WorksheetViewResponse:
        """상세 조회 - 최초 조회이면 조회수 +1, 업로더 보상"""
        self.get_worksheet(worksheet_id)
        counted = self.point_service.apply_view_reward(worksheet_id, viewer_id)

        # 보상 반영 후 최신 조회수로 응답
        self.db.expire_all()
        worksheet = self.get_worksheet(worksheet_id)
        return WorksheetViewResponse(worksheet=worksheet, view_counted=counted)

    def get_download_url(self, worksheet_id: int) -> WorksheetDownloadResponse:
        """업로드된 파일 URL. 외부 링크만 있는 학습지는 404"""
        worksheet = self.get_worksheet(worksheet_id)
        if not worksheet.file_url:
            raise NotFoundError(
                "Worksheet has no uploaded file",
                details={"worksheet_id": worksheet_id},
                error_code="FILE_404",
            )
        return WorksheetDownloadResponse(url=worksheet.file_url)

    def update_thumbnail(
        self, worksheet_id: int, editor_id: int, thumbnail_url: str
    ) -> WorksheetSchema:
        worksheet = self.get_worksheet(worksheet_id)
        if worksheet.uploader_id != editor_id:
            raise AuthorizationError(
                "Only the uploader can change the cover",
                details={"worksheet_id": worksheet_id},
            )

        updated = self.worksheet_repo.update(worksheet_id, thumbnail_url=thumbnail_url)
        logger.info(f"Worksheet thumbnail updated: id={worksheet_id} by={editor_id}")
        return updated
