"""포인트 보상/수수료 정책 (순수 함수)"""

from decimal import ROUND_CEILING, Decimal

from sheetapi.config import settings

VIEW_REWARD_POINTS = settings.POINTS_VIEW_REWARD
QUIZ_PLAY_REWARD_POINTS = settings.POINTS_QUIZ_PLAY_REWARD
WEEKLY_QUIZ_REWARD_POINTS = settings.POINTS_WEEKLY_QUIZ_REWARD

TRANSFER_FEE_RATE = Decimal("0.08")


def transfer_fee(amount: int) -> int:
    """전송 수수료 = ceil(amount * 8%), 10진수 연산으로 계산"""
    fee = (Decimal(amount) * TRANSFER_FEE_RATE).to_integral_value(rounding=ROUND_CEILING)
    return int(fee)


def transfer_total(amount: int) -> int:
    """보내는 사람에게서 차감되는 총액"""
    return amount + transfer_fee(amount)
