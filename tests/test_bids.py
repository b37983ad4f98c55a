"""Bid ranking tests."""

from metalbid.auctions.bids import (
    distinct_bidders,
    highest_bid_of,
    mark_top_bid,
    minimum_next_bid,
    sort_by_amount_descending,
    top_bid,
    total_bid_amount,
)


def test_sort_is_descending_and_leaves_input_alone(make_bid):
    bids = [make_bid(100), make_bid(500), make_bid(300)]
    original = list(bids)
    ranked = sort_by_amount_descending(bids)
    assert [b.amount for b in ranked] == [500, 300, 100]
    assert bids == original
    assert ranked is not bids

def test_sort_is_idempotent(make_bid):
    bids = [make_bid(300, 4), make_bid(100, 1), make_bid(300, 2), make_bid(200, 3)]
    once = sort_by_amount_descending(bids)
    assert sort_by_amount_descending(once) == once

def test_top_bid_tie_goes_to_earlier_timestamp(make_bid):
    t1 = make_bid(100, minutes=1, id="t1")
    t2 = make_bid(300, minutes=20, id="t2")
    t3 = make_bid(300, minutes=10, id="t3")
    assert top_bid([t1, t2, t3]).id == "t3"
    assert top_bid([t3, t2, t1]).id == "t3"

def test_top_bid_matches_max_amount(make_bid):
    bids = [make_bid(amount) for amount in (7, 42, 13, 41)]
    assert top_bid(bids).amount == max(b.amount for b in bids)

def test_top_bid_of_nothing_is_none():
    assert top_bid([]) is None

def test_total_bid_amount(make_bid):
    assert total_bid_amount([make_bid(100), make_bid(250)]) == 350
    assert total_bid_amount([]) == 0

def test_mark_top_bid_flags_exactly_one(make_bid):
    bids = [make_bid(200, 1, id="a", is_top_bid=True), make_bid(300, 3, id="b"), make_bid(300, 2, id="c")]
    marked = mark_top_bid(bids)
    assert [b.id for b in marked if b.is_top_bid] == ["c"]
    assert [b.id for b in marked] == ["c", "b", "a"]
    # the inputs keep whatever flags they arrived with
    assert bids[0].is_top_bid is True

def test_highest_bid_of_user(make_bid):
    bids = [make_bid(100, user_id="u1"), make_bid(400, user_id="u2"), make_bid(250, user_id="u1")]
    assert highest_bid_of(bids, "u1") == 250
    assert highest_bid_of(bids, "nobody") == 0
    assert highest_bid_of(bids, None) == 0

def test_distinct_bidders(make_bid):
    bids = [make_bid(100, user_id="u1"), make_bid(200, user_id="u2"), make_bid(300, user_id="u1")]
    assert distinct_bidders(bids) == 2

def test_minimum_next_bid(make_bid):
    assert minimum_next_bid(50_000, []) == 60_000
    assert minimum_next_bid(50_000, [make_bid(80_000)]) == 90_000
