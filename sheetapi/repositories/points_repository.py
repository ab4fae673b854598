"""
포인트 거래 리포지토리

PointTransaction 은 추가만 가능한 원장이다. 잔액(User.points)과 달리
이 테이블은 조회/감사 용도로만 쓰이고 수정되지 않는다.

조회 가시성 규칙:
- 보상/관리자 조정: 받는 사람에게만 보인다
- TRANSFER: 보낸 사람과 받는 사람 모두에게 보인다
- FEE: 보낸 사람(=수수료 부담자)에게만 보인다
"""

from typing import List, Optional

from sqlalchemy import and_, desc, or_
from sqlalchemy.orm import Session

from sheetapi.models.points import (
    PointTransaction as PointTransactionModel,
    TransactionType,
)
from sheetapi.repositories.base import BaseRepository
from sheetapi.schemas.points import PointTransactionEntry

RECIPIENT_VISIBLE_TYPES = (
    TransactionType.VIEW_REWARD,
    TransactionType.ADMIN_ADJUST,
    TransactionType.QUIZ_PLAY_REWARD,
    TransactionType.WEEKLY_QUIZ_REWARD,
    TransactionType.TRANSFER,
)
SENDER_VISIBLE_TYPES = (TransactionType.TRANSFER, TransactionType.FEE)


class PointsRepository(BaseRepository[PointTransactionModel, PointTransactionEntry]):
    def __init__(self, db: Session):
        super().__init__(PointTransactionModel, PointTransactionEntry, db)

    def _to_schema(self, model_instance) -> Optional[PointTransactionEntry]:
        if model_instance is None:
            return None

        return PointTransactionEntry(
            id=model_instance.id,
            from_user_id=model_instance.from_user_id,
            from_username=(
                model_instance.from_user.username if model_instance.from_user else None
            ),
            to_user_id=model_instance.to_user_id,
            to_username=(
                model_instance.to_user.username if model_instance.to_user else None
            ),
            amount=model_instance.amount,
            type=model_instance.type,
            description=model_instance.description or "",
            created_at=model_instance.created_at,
        )

    def append(
        self,
        to_user_id: int,
        amount: int,
        type: TransactionType,
        description: str = "",
        from_user_id: Optional[int] = None,
    ) -> PointTransactionEntry:
        """거래 1건 추가 (flush 만 수행, 커밋은 호출한 서비스가 담당)"""
        instance = self.model_class(
            from_user_id=from_user_id,
            to_user_id=to_user_id,
            amount=amount,
            type=type,
            description=description,
        )
        self.db.add(instance)
        self.db.flush()
        return self._to_schema(instance)

    def get_history(self, user_id: int, limit: int = 50) -> List[PointTransactionEntry]:
        """사용자에게 보이는 최근 거래 내역 (최신순)"""
        self._ensure_clean_session()
        tx = self.model_class
        rows = (
            self.db.query(tx)
            .filter(
                or_(
                    and_(tx.to_user_id == user_id, tx.type.in_(RECIPIENT_VISIBLE_TYPES)),
                    and_(tx.from_user_id == user_id, tx.type.in_(SENDER_VISIBLE_TYPES)),
                )
            )
            .order_by(desc(tx.created_at), desc(tx.id))
            .limit(limit)
            .all()
        )
        return [self._to_schema(row) for row in rows]
