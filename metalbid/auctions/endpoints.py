from datetime import datetime
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
import structlog

from metalbid.auctions.bids import distinct_bidders, mark_top_bid, minimum_next_bid, top_bid, total_bid_amount
from metalbid.auctions.classifier import category_of, display_title, transaction_type_of
from metalbid.auctions.errors import AuctionNotEnded, InvalidTransactionType
from metalbid.auctions.formatting import format_price, status_text
from metalbid.auctions.listing import AuctionCard, AuctionFilters, SortKey, SortOrder, filter_auctions, sort_auctions, to_list_card
from metalbid.auctions.status import ParticipantOutcome, current_status, derive_result, participant_outcome
from metalbid.auctions.timing import compute_end_time, deadline_text, duration_info, remaining_time, utc_now
from metalbid.models import AuctionCategory, AuctionRecord, AuctionResult, AuctionStatus, BidRecord, TransactionType, as_utc

logger = structlog.get_logger()

router = APIRouter(prefix='/auctions', tags=['auctions'])


class DurationOut(BaseModel):
    transaction_type: TransactionType
    duration_days: int
    duration: str
    description: str
    end_time: datetime | None = None

@router.get('/duration/{transaction_type}', response_model=DurationOut)
async def get_duration(transaction_type: str, created_at: datetime | None = None):
    try:
        info = duration_info(transaction_type)
        end_time = compute_end_time(info.transaction_type, created_at) if created_at else None
    except InvalidTransactionType as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {
        "transaction_type": info.transaction_type,
        "duration_days": info.days,
        "duration": info.duration,
        "description": info.description,
        "end_time": end_time,
    }


class ListIn(BaseModel):
    auctions: list[AuctionRecord]
    filters: AuctionFilters | None = None
    sort_by: SortKey | None = None
    order: SortOrder = SortOrder.DESC
    now: datetime | None = None

@router.post('/list', response_model=list[AuctionCard])
async def list_auctions(body: ListIn):
    now = as_utc(body.now) or utc_now()
    records = filter_auctions(body.auctions, body.filters, now)
    if body.sort_by is not None:
        records = sort_auctions(records, body.sort_by, body.order)
    logger.info("Auction list derived", received=len(body.auctions), returned=len(records))
    return [to_list_card(r, now) for r in records]


class DetailIn(BaseModel):
    auction: AuctionRecord
    now: datetime | None = None

class DetailOut(BaseModel):
    id: str
    title: str
    auction_category: AuctionCategory
    transaction_type: TransactionType | None
    status: AuctionStatus
    status_text: str
    remaining_time: str
    deadline: str
    bids: list[BidRecord]
    top_bid: BidRecord | None
    total_bid_amount: int
    bidder_count: int
    current_bid: str
    minimum_next_bid: int

@router.post('/detail', response_model=DetailOut)
async def auction_detail(body: DetailIn):
    auction = body.auction
    now = as_utc(body.now) or utc_now()
    status = current_status(auction, now)
    best = top_bid(auction.bids)
    return {
        "id": auction.id,
        "title": display_title(auction),
        "auction_category": category_of(auction),
        "transaction_type": transaction_type_of(auction),
        "status": status,
        "status_text": status_text(status),
        "remaining_time": remaining_time(auction.end_time, now),
        "deadline": deadline_text(auction.end_time),
        "bids": mark_top_bid(auction.bids),
        "top_bid": best,
        "total_bid_amount": total_bid_amount(auction.bids),
        "bidder_count": max(auction.bidders, distinct_bidders(auction.bids)),
        "current_bid": format_price(best.amount if best else auction.current_bid),
        "minimum_next_bid": minimum_next_bid(auction.starting_price, auction.bids),
    }


class ResultIn(BaseModel):
    auction: AuctionRecord
    cancelled: bool = False
    user_id: str | None = None
    now: datetime | None = None

class ResultOut(BaseModel):
    status: AuctionStatus
    result: AuctionResult
    outcome: ParticipantOutcome | None = None

@router.post('/result', response_model=ResultOut)
async def auction_result(body: ResultIn):
    auction = body.auction
    now = as_utc(body.now) or utc_now()
    status = current_status(auction, now)
    try:
        result = derive_result(status, auction.bids, cancelled=body.cancelled, starting_price=auction.starting_price)
    except AuctionNotEnded as e:
        raise HTTPException(status_code=409, detail=str(e))
    logger.info("Auction result derived", auction_id=auction.id, result=result.result.value)
    outcome = participant_outcome(auction, result, body.user_id) if body.user_id else None
    return {"status": status, "result": result, "outcome": outcome}
