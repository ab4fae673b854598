import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sheetapi.models.worksheet import Worksheet, WorksheetView
from sheetapi.repositories.base import BaseRepository
from sheetapi.schemas.worksheet import WorksheetViewRecord

logger = logging.getLogger(__name__)


class ViewRepository(BaseRepository[WorksheetView, WorksheetViewRecord]):
    """(학습지, 조회자) 최초 조회 기록"""

    def __init__(self, db: Session):
        super().__init__(WorksheetView, WorksheetViewRecord, db)

    def try_record(self, worksheet_id: int, viewer_id: int) -> bool:
        """조회 기록을 삽입한다. 유니크 제약에 걸리면 롤백 후 False.

        삽입 성공이 곧 "보상 지급 확정" 시점이다. 호출한 쪽의 트랜잭션
        안에서 flush 하므로 False 인 경우 같은 트랜잭션의 이전 변경도 사라진다.
        """
        self.db.add(WorksheetView(worksheet_id=worksheet_id, viewer_id=viewer_id))
        try:
            self.db.flush()
        except IntegrityError:
            self.db.rollback()
            logger.debug(
                f"View already recorded: worksheet={worksheet_id} viewer={viewer_id}"
            )
            return False
        return True

    def has_viewed(self, worksheet_id: int, viewer_id: int) -> bool:
        return self.exists({"worksheet_id": worksheet_id, "viewer_id": viewer_id})

    def delete_for_worksheet(self, worksheet_id: int) -> int:
        return (
            self.db.query(WorksheetView)
            .filter(WorksheetView.worksheet_id == worksheet_id)
            .delete(synchronize_session=False)
        )

    def delete_for_subject(self, subject_id: int) -> int:
        worksheet_ids = select(Worksheet.id).where(Worksheet.subject_id == subject_id)
        return (
            self.db.query(WorksheetView)
            .filter(WorksheetView.worksheet_id.in_(worksheet_ids))
            .delete(synchronize_session=False)
        )
