"""
Test DutchAuctionClient

Tests for auction reads, purchase funding and local price verification.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from powgame.game.client import DutchAuctionClient
from powgame.types import AuctionState

from fakes import OPERATOR, FakeDutchAuction, FakeWrappedNative, addr

START = 1_700_000_000


def make_client():
    auction = FakeDutchAuction(addr(0xA0C7), initialized=True, auction_count=3)
    weth = FakeWrappedNative(addr(0x2))
    for token_id in (2, 3, 4):
        auction.states[token_id] = AuctionState(token_id, 2 * 10**14, 10**14, START, 0)
    return DutchAuctionClient(auction, weth, OPERATOR), auction, weth


def test_reads_pass_through():
    print("Testing client reads...")

    client, _, _ = make_client()

    assert client.get_current_auction_count() == 3
    assert client.get_current_auctions() == [2, 3, 4]
    assert len(client.get_current_auction_states()) == 3
    assert client.get_auction_state(3).start_time == START
    assert client.get_bureau_state().total_auctions == 3

    print("  Client reads: PASSED")


def test_purchase_wraps_and_approves():
    print("Testing purchase funding...")

    client, auction, weth = make_client()

    result = client.purchase(2, 0, 10**15, OPERATOR, OPERATOR)

    assert result.is_success
    assert weth.sent == [("deposit", 10**15), ("approve", auction.address, 10**15)]
    assert auction.sent == [("purchase", 2, 0, 10**15, OPERATOR, OPERATOR)]

    print("  Purchase funding: PASSED")


def test_purchase_with_funds_in_place():
    client, auction, weth = make_client()
    weth.balances[OPERATOR.lower()] = 10**16
    weth.allowances[(OPERATOR.lower(), auction.address.lower())] = 10**16

    client.purchase(2, 0, 10**15, OPERATOR, OPERATOR)

    assert weth.sent == []


def test_purchase_without_asset():
    client, _, weth = make_client()

    client.purchase(2, 5, 0, OPERATOR, OPERATOR)

    assert weth.sent == []


def test_verify_price_matches_chain():
    print("Testing verify_price...")

    client, auction, _ = make_client()
    auction.prices[2] = 2 * 10**14 - 115_490_641_937

    check = client.verify_price(2, now=START + 3)

    assert check.matches
    assert check.difference == 0

    print("  verify_price: PASSED")


def test_verify_price_reports_mismatch():
    client, auction, _ = make_client()
    auction.prices[2] = 2 * 10**14

    check = client.verify_price(2, now=START + 3)

    assert not check.matches
    assert check.difference == 115_490_641_937
    assert client.verify_price(2, now=START + 3, tolerance_bips=2 * 10**11).matches


def test_verify_price_of_sold_auction():
    client, auction, _ = make_client()
    auction.states[2] = AuctionState(2, 2 * 10**14, 10**14, START, 150 * 10**12)
    auction.prices[2] = 150 * 10**12

    check = client.verify_price(2, now=START + 10_000)

    assert check.matches
    assert check.expected_price_bips == 150 * 10**12


if __name__ == "__main__":
    test_reads_pass_through()
    test_purchase_wraps_and_approves()
    test_verify_price_matches_chain()
