from datetime import datetime, timedelta, timezone
import pytest
from fastapi.testclient import TestClient
from metalbid.models import BidRecord, parse_auction
from main import app

T0 = datetime(2025, 1, 1, tzinfo=timezone.utc)

@pytest.fixture(scope="session")
def client():
    return TestClient(app)

@pytest.fixture
def make_bid():
    counter = iter(range(1, 10_000))

    def _make(amount: int, minutes: int = 0, user_id: str = "u1", **fields) -> BidRecord:
        n = next(counter)
        return BidRecord(
            id=fields.pop("id", f"bid-{n}"),
            auction_id=fields.pop("auction_id", "a1"),
            user_id=user_id,
            amount=amount,
            bid_time=T0 + timedelta(minutes=minutes),
            **fields,
        )
    return _make

@pytest.fixture
def make_auction():
    counter = iter(range(1, 10_000))

    def _make(category: str = "scrap", **fields):
        n = next(counter)
        row = {
            "id": f"auction-{n}",
            "title": f"Auction {n}",
            "auction_category": category,
            "created_at": T0,
            "end_time": T0 + timedelta(days=3),
        }
        if category != "demolition":
            row["transaction_type"] = "normal"
        row.update(fields)
        return parse_auction(row)
    return _make
