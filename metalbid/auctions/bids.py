from datetime import datetime, timezone

import structlog

from metalbid.core.config import settings
from metalbid.models import BidRecord

logger = structlog.get_logger()

# Bids without a timestamp lose ties against any timestamped bid
_LATEST = datetime.max.replace(tzinfo=timezone.utc)

def _rank_key(bid: BidRecord) -> tuple[int, datetime]:
    return -bid.amount, bid.bid_time or _LATEST

def sort_by_amount_descending(bids: list[BidRecord]) -> list[BidRecord]:
    """Highest amount first; equal amounts keep the earlier bid first. Input is not mutated."""
    return sorted(bids, key=_rank_key)

def top_bid(bids: list[BidRecord]) -> BidRecord | None:
    if not bids:
        return None
    ranked = sort_by_amount_descending(bids)
    best = ranked[0]
    if len(ranked) > 1 and ranked[1].amount == best.amount:
        # Amounts are meant to be strictly increasing per auction
        logger.warning("Tied top bid amount", auction_id=best.auction_id, amount=best.amount,
                       bid_id=best.id, tied_bid_id=ranked[1].id)
    return best

def total_bid_amount(bids: list[BidRecord]) -> int:
    return sum(b.amount for b in bids)

def mark_top_bid(bids: list[BidRecord]) -> list[BidRecord]:
    """Ranked copies with is_top_bid set on exactly the winning bid."""
    best = top_bid(bids)
    return [b.model_copy(update={"is_top_bid": b is best}) for b in sort_by_amount_descending(bids)]

def highest_bid_of(bids: list[BidRecord], user_id: str | None) -> int:
    if user_id is None:
        return 0
    return max((b.amount for b in bids if b.user_id == user_id), default=0)

def distinct_bidders(bids: list[BidRecord]) -> int:
    return len({b.user_id for b in bids})

def minimum_next_bid(starting_price: int, bids: list[BidRecord]) -> int:
    best = top_bid(bids)
    current = best.amount if best else starting_price
    return current + settings.min_bid_increment
