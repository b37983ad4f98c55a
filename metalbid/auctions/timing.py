from datetime import datetime, timedelta, timezone

from pydantic import BaseModel

from metalbid.auctions.errors import InvalidTransactionType
from metalbid.auctions.formatting import display_time
from metalbid.core.config import settings
from metalbid.models import TransactionType, as_utc

ENDED_TEXT = "종료됨"

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 60 * SECONDS_PER_MINUTE
SECONDS_PER_DAY = 24 * SECONDS_PER_HOUR


def _transaction_type(value) -> TransactionType:
    try:
        return TransactionType(value)
    except ValueError:
        raise InvalidTransactionType(value) from None

def duration_days(transaction_type: TransactionType | str) -> int:
    """Auction length in days; unknown types are rejected rather than defaulted."""
    tx = _transaction_type(transaction_type)
    if tx is TransactionType.URGENT:
        return settings.urgent_duration_days
    return settings.normal_duration_days

def compute_end_time(transaction_type: TransactionType | str, created_at: datetime) -> datetime:
    # Fixed 24h days in UTC, so DST shifts in the viewer's zone never change the length
    return as_utc(created_at) + timedelta(days=duration_days(transaction_type))


def utc_now() -> datetime:
    return datetime.now(timezone.utc)

def seconds_left(end_time: datetime | None, now: datetime | None = None) -> int:
    """Whole seconds until end_time, 0 once passed or when end_time is missing."""
    if end_time is None:
        return 0
    now = as_utc(now) if now is not None else utc_now()
    return max(0, int((as_utc(end_time) - now).total_seconds()))

def _breakdown(seconds: int) -> tuple[int, int, int]:
    days, rest = divmod(seconds, SECONDS_PER_DAY)
    hours, rest = divmod(rest, SECONDS_PER_HOUR)
    return days, hours, rest // SECONDS_PER_MINUTE

def _has_ended(end_time: datetime | None, now: datetime | None) -> bool:
    if end_time is None:
        return True
    now = as_utc(now) if now is not None else utc_now()
    return as_utc(end_time) <= now

def time_until_end(end_time: datetime | None, now: datetime | None = None) -> str:
    """Largest applicable units, minutes floored: "2일 3시간", "5시간 0분", "0분"."""
    if _has_ended(end_time, now):
        return ENDED_TEXT
    days, hours, minutes = _breakdown(seconds_left(end_time, now))
    if days > 0:
        return f"{days}일 {hours}시간"
    if hours > 0:
        return f"{hours}시간 {minutes}분"
    return f"{minutes}분"

def remaining_time(end_time: datetime | None, now: datetime | None = None) -> str:
    text = time_until_end(end_time, now)
    if text == ENDED_TEXT:
        return text
    return f"{text} 남음"

def compact_remaining_time(end_time: datetime | None, now: datetime | None = None) -> str:
    """Single unit for list rows: "2일", "5시간", "30분"."""
    if _has_ended(end_time, now):
        return ENDED_TEXT
    days, hours, minutes = _breakdown(seconds_left(end_time, now))
    if days > 0:
        return f"{days}일"
    if hours > 0:
        return f"{hours}시간"
    return f"{minutes}분"

def deadline_text(end_time: datetime | None) -> str:
    if end_time is None:
        return ENDED_TEXT
    return display_time(as_utc(end_time)).strftime("%m/%d %H:%M 마감")


class DurationInfo(BaseModel):
    transaction_type: TransactionType
    days: int
    duration: str
    description: str

def duration_info(transaction_type: TransactionType | str) -> DurationInfo:
    tx = _transaction_type(transaction_type)
    days = duration_days(tx)
    if tx is TransactionType.URGENT:
        description = f"긴급 경매 ({days * 24}시간)"
    else:
        description = f"일반 경매 ({days}일)"
    return DurationInfo(transaction_type=tx, days=days, duration=f"{days}일", description=description)
