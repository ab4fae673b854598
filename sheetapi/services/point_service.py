import logging
from contextlib import contextmanager
from typing import List

from sqlalchemy.orm import Session

from sheetapi.config import settings
from sheetapi.core.exceptions import (
    AccountNotFoundError,
    InsufficientBalanceError,
    InvalidAmountError,
    NotFollowingError,
    NotFoundError,
    SelfTransferError,
)
from sheetapi.models.points import TransactionType
from sheetapi.models.quiz import Quiz
from sheetapi.models.worksheet import Worksheet
from sheetapi.repositories.follow_repository import FollowRepository
from sheetapi.repositories.points_repository import PointsRepository
from sheetapi.repositories.user_repository import UserRepository
from sheetapi.repositories.view_repository import ViewRepository
from sheetapi.repositories.worksheet_repository import WorksheetRepository
from sheetapi.schemas.points import (
    BalanceResponse,
    PointTransactionEntry,
    TransferResult,
)
from sheetapi.services import reward_policy

logger = logging.getLogger(__name__)


class PointService:
    """포인트 잔액 변경과 거래 기록을 담당하는 유일한 서비스

    모든 복합 연산(차감/적립/기록)은 하나의 DB 트랜잭션 안에서 실행된다.
    """

    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository(db)
        self.points_repo = PointsRepository(db)
        self.follow_repo = FollowRepository(db)
        self.view_repo = ViewRepository(db)
        self.worksheet_repo = WorksheetRepository(db)

    @contextmanager
    def _transaction(self, commit: bool = True):
        """commit=True 이면 성공 시 커밋, 예외 시 롤백 후 재전파"""
        self.user_repo._ensure_clean_session()
        try:
            yield
            if commit:
                self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def apply_view_reward(self, worksheet_id: int, viewer_id: int) -> bool:
        """학습지 최초 조회 보상

        Returns:
            bool: 이번 조회가 집계(조회수 +1, 업로더 보상)되었는지 여부
        """
        with self._transaction():
            worksheet = self.db.get(Worksheet, worksheet_id)
            if worksheet is None:
                raise NotFoundError(
                    f"Worksheet not found: {worksheet_id}",
                    details={"worksheet_id": worksheet_id},
                    error_code="WORKSHEET_404",
                )

            owner_id = worksheet.uploader_id
            title = worksheet.title
            if owner_id == viewer_id:
                return False

            if self.view_repo.has_viewed(worksheet_id, viewer_id):
                return False
            if not self.view_repo.try_record(worksheet_id, viewer_id):
                return False

            amount = reward_policy.VIEW_REWARD_POINTS
            self.worksheet_repo.increment_views(worksheet_id)
            if not self.user_repo.credit(owner_id, amount, earned=True):
                raise AccountNotFoundError(owner_id)
            self.points_repo.append(
                to_user_id=owner_id,
                from_user_id=viewer_id,
                amount=amount,
                type=TransactionType.VIEW_REWARD,
                description=f'"{title}" view reward',
            )

        logger.info(
            f"View reward: worksheet={worksheet_id} viewer={viewer_id} owner={owner_id} +{amount}"
        )
        return True

    def transfer(self, sender_id: int, receiver_id: int, amount: int) -> TransferResult:
        """팔로우한 사용자에게 포인트 전송 (수수료 8%, 소멸)"""
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise InvalidAmountError(
                "Amount must be a positive integer", details={"amount": amount}
            )
        if sender_id == receiver_id:
            raise SelfTransferError()

        receiver = self.user_repo.get_by_id(receiver_id)
        if receiver is None:
            raise AccountNotFoundError(receiver_id)

        if not self.follow_repo.is_following(sender_id, receiver_id):
            raise NotFollowingError(details={"to_user_id": receiver_id})

        sender = self.user_repo.get_by_id(sender_id)
        if sender is None:
            raise AccountNotFoundError(sender_id)

        total = reward_policy.transfer_total(amount)
        fee = total - amount

        with self._transaction():
            if not self.user_repo.debit_if_sufficient(sender_id, total):
                available = self.user_repo.get_points(sender_id) or 0
                logger.warning(
                    f"Transfer rejected: sender={sender_id} required={total} available={available}"
                )
                raise InsufficientBalanceError(
                    f"Insufficient balance. Required: {total} "
                    f"(amount {amount} + fee {fee}), Available: {available}",
                    details={"required": total, "available": available},
                )

            self.user_repo.credit(receiver_id, amount, earned=True)
            self.points_repo.append(
                from_user_id=sender_id,
                to_user_id=receiver_id,
                amount=amount,
                type=TransactionType.TRANSFER,
                description=f"{sender.username} -> {receiver.username} transfer",
            )
            self.points_repo.append(
                from_user_id=sender_id,
                to_user_id=sender_id,
                amount=-fee,
                type=TransactionType.FEE,
                description=f"Transfer fee 8% ({fee}pt burned)",
            )
            sender_points = self.user_repo.get_points(sender_id)

        logger.info(
            f"Transfer: {sender_id} -> {receiver_id} amount={amount} fee={fee} sender_points={sender_points}"
        )
        return TransferResult(
            message=f"Sent {amount}pt to {receiver.username} (fee {fee}pt)",
            amount=amount,
            fee=fee,
            sender_points=sender_points,
        )

    def admin_adjust(self, account_id: int, amount: int, admin_id: int = None) -> int:
        """관리자 포인트 조정 (음수 허용, 결과 잔액 음수 가능)

        Returns:
            int: 조정 후 잔액
        """
        if isinstance(amount, bool) or not isinstance(amount, int) or amount == 0:
            raise InvalidAmountError(
                "Amount must be a non-zero integer", details={"amount": amount}
            )

        with self._transaction():
            if not self.user_repo.credit(account_id, amount, earned=amount > 0):
                raise AccountNotFoundError(account_id)

            sign = "+" if amount > 0 else ""
            self.points_repo.append(
                to_user_id=account_id,
                amount=amount,
                type=TransactionType.ADMIN_ADJUST,
                description=f"Admin adjustment: {sign}{amount} pt",
            )
            points = self.user_repo.get_points(account_id)

        logger.info(
            f"Admin adjust: account={account_id} amount={amount} by={admin_id} points={points}"
        )
        return points

    def quiz_play_reward(self, quiz: Quiz, player_id: int, commit: bool = True) -> bool:
        """퀴즈 출제자 보상 (본인 플레이 제외, 중복 제한 없음)"""
        if quiz.creator_id == player_id:
            return False

        amount = reward_policy.QUIZ_PLAY_REWARD_POINTS
        with self._transaction(commit=commit):
            if not self.user_repo.credit(quiz.creator_id, amount, earned=True):
                raise AccountNotFoundError(quiz.creator_id)
            self.points_repo.append(
                from_user_id=player_id,
                to_user_id=quiz.creator_id,
                amount=amount,
                type=TransactionType.QUIZ_PLAY_REWARD,
                description=f'"{quiz.title}" play reward',
            )

        logger.info(
            f"Quiz play reward: quiz={quiz.id} player={player_id} creator={quiz.creator_id} +{amount}"
        )
        return True

    def weekly_quiz_reward(
        self, winner_id: int, period_key: str, total_score: int, commit: bool = True
    ) -> int:
        """주간 리더보드 1위 보상"""
        amount = reward_policy.WEEKLY_QUIZ_REWARD_POINTS
        with self._transaction(commit=commit):
            if not self.user_repo.credit(winner_id, amount, earned=True):
                raise AccountNotFoundError(winner_id)
            self.points_repo.append(
                to_user_id=winner_id,
                amount=amount,
                type=TransactionType.WEEKLY_QUIZ_REWARD,
                description=f"Weekly quiz winner ({period_key}, {total_score} pts)",
            )

        logger.info(
            f"Weekly quiz reward: period={period_key} winner={winner_id} score={total_score} +{amount}"
        )
        return amount

    def get_history(
        self, user_id: int, limit: int = settings.HISTORY_LIMIT
    ) -> List[PointTransactionEntry]:
        """최근 거래 내역 (최대 HISTORY_LIMIT 건)"""
        return self.points_repo.get_history(
            user_id, limit=min(limit, settings.HISTORY_LIMIT)
        )

    def get_balance(self, user_id: int) -> BalanceResponse:
        user = self.user_repo.get_by_id(user_id)
        if user is None:
            raise AccountNotFoundError(user_id)
        return BalanceResponse(points=user.points, total_earned=user.total_earned)
