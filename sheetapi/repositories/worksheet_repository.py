from typing import List, Optional

from sqlalchemy import desc, update
from sqlalchemy.orm import Session

from sheetapi.models.worksheet import Subject, Worksheet
from sheetapi.repositories.base import BaseRepository
from sheetapi.schemas.user import ProfileWorksheet
from sheetapi.schemas.worksheet import SubjectSchema, WorksheetSchema


class SubjectRepository(BaseRepository[Subject, SubjectSchema]):
    def __init__(self, db: Session):
        super().__init__(Subject, SubjectSchema, db)

    def get_by_name(self, name: str) -> Optional[SubjectSchema]:
        return self.get_by_field("name", name)

    def list_subjects(self) -> List[SubjectSchema]:
        return self.find_all(order_by="name")


class WorksheetRepository(BaseRepository[Worksheet, WorksheetSchema]):
    def __init__(self, db: Session):
        super().__init__(Worksheet, WorksheetSchema, db)

    def _to_schema(self, model_instance) -> Optional[WorksheetSchema]:
        if model_instance is None:
            return None

        return WorksheetSchema(
            id=model_instance.id,
            title=model_instance.title,
            subject_id=model_instance.subject_id,
            subject_name=model_instance.subject.name if model_instance.subject else None,
            file_url=model_instance.file_url,
            external_url=model_instance.external_url,
            thumbnail_url=model_instance.thumbnail_url,
            uploader_id=model_instance.uploader_id,
            uploader_username=(
                model_instance.uploader.username if model_instance.uploader else None
            ),
            views=model_instance.views,
            created_at=model_instance.created_at,
        )

    def list_worksheets(
        self, subject_id: Optional[int] = None, sort: str = "recent"
    ) -> List[WorksheetSchema]:
        self._ensure_clean_session()
        query = self.db.query(Worksheet)
        if subject_id is not None:
            query = query.filter(Worksheet.subject_id == subject_id)

        if sort == "views":
            query = query.order_by(desc(Worksheet.views), desc(Worksheet.id))
        else:
            query = query.order_by(desc(Worksheet.created_at), desc(Worksheet.id))

        return [self._to_schema(w) for w in query.all()]

    def delete_for_subject(self, subject_id: int) -> int:
        return (
            self.db.query(Worksheet)
            .filter(Worksheet.subject_id == subject_id)
            .delete(synchronize_session=False)
        )

    def get_owner_id(self, worksheet_id: int) -> Optional[int]:
        return (
            self.db.query(Worksheet.uploader_id)
            .filter(Worksheet.id == worksheet_id)
            .scalar()
        )

    def increment_views(self, worksheet_id: int) -> None:
        self.db.execute(
            update(Worksheet)
            .where(Worksheet.id == worksheet_id)
            .values(views=Worksheet.views + 1)
            .execution_options(synchronize_session="fetch")
        )

    def top_by_uploader(self, uploader_id: int, limit: int = 3) -> List[ProfileWorksheet]:
        self._ensure_clean_session()
        rows = (
            self.db.query(Worksheet)
            .filter(Worksheet.uploader_id == uploader_id)
            .order_by(desc(Worksheet.views), desc(Worksheet.id))
            .limit(limit)
            .all()
        )
        return [
            ProfileWorksheet(
                id=w.id,
                title=w.title,
                views=w.views,
                subject_name=w.subject.name if w.subject else None,
            )
            for w in rows
        ]
