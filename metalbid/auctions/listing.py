from datetime import datetime
import enum

from pydantic import BaseModel

from metalbid.auctions.classifier import category_of, display_title, metal_type, quantity_text, transaction_type_of
from metalbid.auctions.formatting import format_address_for_list, format_price
from metalbid.auctions.status import current_status
from metalbid.auctions.timing import compact_remaining_time, utc_now
from metalbid.models import ApprovalStatus, AuctionCategory, AuctionStatus, TransactionType


class SortKey(str, enum.Enum):
    END_TIME = "endTime"
    CURRENT_BID = "currentBid"
    BIDDERS = "bidders"
    CREATED_AT = "createdAt"
    VIEW_COUNT = "viewCount"
    PRICE_PER_UNIT = "pricePerUnit"

class SortOrder(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"

class AuctionFilters(BaseModel):
    status: AuctionStatus | None = None
    product_type: str | None = None
    transaction_type: TransactionType | None = None
    auction_category: AuctionCategory | None = None
    location: str | None = None


def _matches(record, filters: AuctionFilters, now: datetime) -> bool:
    if filters.status and current_status(record, now) != filters.status:
        return False
    if filters.product_type and record.product_type.id != filters.product_type:
        return False
    if filters.transaction_type and transaction_type_of(record) != filters.transaction_type:
        return False
    if filters.auction_category and category_of(record) != filters.auction_category:
        return False
    if filters.location:
        city = record.address.city or ""
        district = record.address.district or ""
        if filters.location not in city and filters.location not in district:
            return False
    return True

def filter_auctions(records: list, filters: AuctionFilters | None = None, now: datetime | None = None) -> list:
    """All given predicates must hold. Status is compared against the derived status."""
    if filters is None:
        return list(records)
    now = now or utc_now()
    return [r for r in records if _matches(r, filters, now)]

def auctions_by_category(records: list, category: AuctionCategory | str) -> list:
    return [r for r in records if category_of(r) == category]


def _timestamp(dt: datetime | None) -> float:
    return dt.timestamp() if dt is not None else 0

def _sort_value(record, sort_by: SortKey) -> float:
    # Missing numbers sort as zero; records are never dropped
    if sort_by is SortKey.END_TIME:
        return _timestamp(record.end_time)
    if sort_by is SortKey.CURRENT_BID:
        return record.current_bid or 0
    if sort_by is SortKey.BIDDERS:
        return record.bidders or 0
    if sort_by is SortKey.CREATED_AT:
        return _timestamp(record.created_at)
    if sort_by is SortKey.VIEW_COUNT:
        return record.view_count or 0
    if sort_by is SortKey.PRICE_PER_UNIT:
        return record.price_per_unit or 0
    raise ValueError(f"Unknown sort key: {sort_by!r}")

def sort_auctions(records: list, sort_by: SortKey | str = SortKey.CREATED_AT,
                  order: SortOrder | str = SortOrder.DESC) -> list:
    """Stable: records with equal keys keep their input order in both directions."""
    sort_by = SortKey(sort_by)
    descending = SortOrder(order) is SortOrder.DESC
    return sorted(records, key=lambda r: _sort_value(r, sort_by), reverse=descending)


class AuctionCard(BaseModel):
    id: str
    title: str
    metal_type: str
    weight: str
    current_bid: str
    end_time: str
    status: AuctionStatus
    bidders: int
    address: str | None = None
    approval_status: ApprovalStatus | None = None

def to_list_card(record, now: datetime | None = None) -> AuctionCard:
    now = now or utc_now()
    return AuctionCard(
        id=record.id,
        title=display_title(record),
        metal_type=metal_type(record),
        weight=quantity_text(record),
        current_bid=format_price(record.current_bid or 0),
        end_time=compact_remaining_time(record.end_time, now),
        status=current_status(record, now),
        bidders=record.bidders or 0,
        address=format_address_for_list(record.address.address) or None,
        approval_status=record.approval_status,
    )
