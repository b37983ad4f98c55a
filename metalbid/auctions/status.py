"""Status and settlement derivation.

Status is a projection of end_time against the clock and is recomputed on
every read; the snapshot stored on a record is never consulted.
"""

from datetime import datetime, timedelta
import enum

from pydantic import BaseModel

from metalbid.auctions.bids import highest_bid_of, top_bid
from metalbid.auctions.classifier import transaction_type_of
from metalbid.auctions.errors import AuctionNotEnded, InvalidTransactionType
from metalbid.auctions.timing import duration_days, utc_now
from metalbid.core.config import settings
from metalbid.models import AuctionResult, AuctionResultKind, AuctionStatus, BidRecord, ResultMetadata, as_utc


def ending_threshold(transaction_type=None) -> timedelta:
    """Window before end_time that reads as "ending".

    The configured window, capped at a third of the auction's length so a
    one-day urgent auction is not "ending" for its whole life. This departs
    from a flat 24 h window on purpose: normal auctions keep 24 h, urgent
    ones get 8 h. Callers of derive_status without a transaction type still
    get the flat window.
    """
    threshold = timedelta(hours=settings.ending_threshold_hours)
    if transaction_type is None:
        return threshold
    try:
        length = timedelta(days=duration_days(transaction_type))
    except InvalidTransactionType:
        return threshold
    return min(threshold, length / 3)

def derive_status(end_time: datetime | None, now: datetime | None = None,
                  threshold: timedelta | None = None) -> AuctionStatus:
    if end_time is None:
        return AuctionStatus.ENDED
    now = as_utc(now) if now is not None else utc_now()
    if threshold is None:
        threshold = ending_threshold()
    left = as_utc(end_time) - now
    if left <= timedelta(0):
        return AuctionStatus.ENDED
    if left <= threshold:
        return AuctionStatus.ENDING
    return AuctionStatus.ACTIVE

def current_status(record, now: datetime | None = None) -> AuctionStatus:
    return derive_status(record.end_time, now, ending_threshold(transaction_type_of(record)))


def derive_result(status: AuctionStatus | str, bids: list[BidRecord], cancelled: bool = False,
                  starting_price: int | None = None) -> AuctionResult:
    # Cancellation is an administrative decision made outside this layer
    if cancelled:
        return AuctionResult(result=AuctionResultKind.CANCELLED,
                             metadata=ResultMetadata(reason="cancelled", starting_price=starting_price))
    if status != AuctionStatus.ENDED:
        raise AuctionNotEnded(status)
    best = top_bid(bids)
    if best is None:
        return AuctionResult(result=AuctionResultKind.FAILED,
                             metadata=ResultMetadata(reason="no_bids", highest_bid=0, starting_price=starting_price))
    return AuctionResult(
        result=AuctionResultKind.SUCCESSFUL,
        winning_user_id=best.user_id,
        winning_amount=best.amount,
        metadata=ResultMetadata(highest_bid=best.amount, starting_price=starting_price),
    )

def auction_result(record, now: datetime | None = None, cancelled: bool = False) -> AuctionResult | None:
    """Result of a record, or None while it is still running."""
    if cancelled:
        return derive_result(AuctionStatus.ENDED, record.bids, cancelled=True, starting_price=record.starting_price)
    status = current_status(record, now)
    if status != AuctionStatus.ENDED:
        return None
    return derive_result(status, record.bids, starting_price=record.starting_price)


class Role(str, enum.Enum):
    WINNER = "winner"
    LOSER = "loser"
    SELLER = "seller"
    OBSERVER = "observer"

class ParticipantOutcome(BaseModel):
    role: Role
    my_highest_bid: int = 0
    # How far the user's best bid was below the winning amount
    price_difference: int = 0

def participant_outcome(record, result: AuctionResult, user_id: str | None) -> ParticipantOutcome:
    mine = highest_bid_of(record.bids, user_id)
    if user_id is not None and result.result == AuctionResultKind.SUCCESSFUL and result.winning_user_id == user_id:
        return ParticipantOutcome(role=Role.WINNER, my_highest_bid=mine)
    if user_id is not None and record.user_id == user_id:
        return ParticipantOutcome(role=Role.SELLER)
    if mine > 0:
        gap = result.winning_amount - mine if result.winning_amount else 0
        return ParticipantOutcome(role=Role.LOSER, my_highest_bid=mine, price_difference=gap)
    return ParticipantOutcome(role=Role.OBSERVER)
