"""Auction endpoint tests: duration lookup, list cards, detail and result derivation."""

from fastapi.testclient import TestClient


def auction_row(auction_id: str, category: str = "scrap", **fields) -> dict:
    row = {
        "id": auction_id,
        "title": f"Auction {auction_id}",
        "auction_category": category,
        "transaction_type": "normal",
        "starting_price": 100000,
        "created_at": "2025-01-01T00:00:00Z",
        "end_time": "2025-01-04T00:00:00Z",
    }
    row.update(fields)
    return row

def bid_row(bid_id: str, user_id: str, amount: int, created_at: str) -> dict:
    return {"id": bid_id, "user_id": user_id, "amount": amount, "created_at": created_at}


def test_duration_for_urgent_auction(client: TestClient):
    r = client.get('/auctions/duration/urgent', params={"created_at": "2025-01-01T00:00:00Z"})
    assert r.status_code == 200
    data = r.json()
    assert data["duration_days"] == 1
    assert data["description"] == "긴급 경매 (24시간)"
    assert data["end_time"].startswith("2025-01-02T00:00:00")

def test_duration_rejects_unknown_type(client: TestClient):
    r = client.get('/auctions/duration/weekly')
    assert r.status_code == 400
    assert "weekly" in r.json()["detail"]

def test_list_filters_sorts_and_projects(client: TestClient):
    auctions = [
        auction_row("a1", current_bid=300000, address_info={"city": "부산"}),
        auction_row("a2", "machinery", current_bid=None),
        auction_row("a3", current_bid=500000, quantity_amount=800),
        auction_row("a4", current_bid=200000, end_time="2024-12-31T00:00:00Z"),
    ]
    body = {
        "auctions": auctions,
        "filters": {"auction_category": "scrap", "status": "active"},
        "sort_by": "currentBid",
        "order": "desc",
        "now": "2025-01-01T00:00:00Z",
    }
    r = client.post('/auctions/list', json=body)
    assert r.status_code == 200
    cards = r.json()
    assert [c["id"] for c in cards] == ["a3", "a1"]
    assert cards[0]["current_bid"] == "₩500,000"
    assert cards[0]["weight"] == "800kg"
    assert cards[0]["end_time"] == "3일"
    assert cards[0]["status"] == "active"

def test_list_without_filters_keeps_order(client: TestClient):
    auctions = [auction_row("x1"), auction_row("x2", "demolition"), auction_row("x3", "materials")]
    r = client.post('/auctions/list', json={"auctions": auctions, "now": "2025-01-01T00:00:00Z"})
    assert r.status_code == 200
    assert [c["id"] for c in r.json()] == ["x1", "x2", "x3"]

def test_list_rejects_unknown_category(client: TestClient):
    r = client.post('/auctions/list', json={"auctions": [auction_row("bad", "vehicles")]})
    assert r.status_code == 422

def test_detail_ranks_bids(client: TestClient):
    bids = [
        bid_row("b1", "u1", 100000, "2025-01-01T01:00:00Z"),
        bid_row("b2", "u2", 300000, "2025-01-01T03:00:00Z"),
        bid_row("b3", "u3", 300000, "2025-01-01T02:00:00Z"),
    ]
    body = {"auction": auction_row("d1", auction_bids=bids, bidder_count=3), "now": "2025-01-01T12:00:00Z"}
    r = client.post('/auctions/detail', json=body)
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "active"
    assert data["remaining_time"] == "2일 12시간 남음"
    assert data["top_bid"]["id"] == "b3"
    assert [b["id"] for b in data["bids"]] == ["b3", "b2", "b1"]
    assert [b["is_top_bid"] for b in data["bids"]] == [True, False, False]
    assert data["total_bid_amount"] == 700000
    assert data["current_bid"] == "₩300,000"
    assert data["minimum_next_bid"] == 310000

def test_result_for_running_auction_conflicts(client: TestClient):
    body = {"auction": auction_row("r1"), "now": "2025-01-02T00:00:00Z"}
    r = client.post('/auctions/result', json=body)
    assert r.status_code == 409

def test_result_for_ended_auction(client: TestClient):
    bids = [bid_row("b1", "u1", 150000, "2025-01-01T01:00:00Z"), bid_row("b2", "u2", 180000, "2025-01-02T01:00:00Z")]
    body = {"auction": auction_row("r2", auction_bids=bids), "user_id": "u1", "now": "2025-01-05T00:00:00Z"}
    r = client.post('/auctions/result', json=body)
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ended"
    assert data["result"]["result"] == "successful"
    assert data["result"]["winning_user_id"] == "u2"
    assert data["result"]["winning_amount"] == 180000
    assert data["outcome"]["role"] == "loser"
    assert data["outcome"]["price_difference"] == 30000

def test_result_failed_and_cancelled(client: TestClient):
    ended = {"auction": auction_row("r3"), "now": "2025-01-05T00:00:00Z"}
    r = client.post('/auctions/result', json=ended)
    assert r.json()["result"]["result"] == "failed"
    assert r.json()["outcome"] is None

    running = {"auction": auction_row("r4"), "cancelled": True, "now": "2025-01-02T00:00:00Z"}
    r = client.post('/auctions/result', json=running)
    assert r.status_code == 200
    assert r.json()["result"]["result"] == "cancelled"
