"""
Test Address Resolution

Tests for the address book, registry, deployment records and the layered
resolver, without touching the network.
"""

import json
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import httpx
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from powgame.addresses import (
    CONTRACT_NAMES,
    AddressResolver,
    DeploymentRecordStore,
    HttpDeploymentStore,
    NullDeploymentStore,
    get_contract_name,
    load_static_book,
)
from powgame.errors import PreconditionViolation, RpcError
from powgame.types import AddressBook, AddressSource, DeploymentRecord, Registry

DUTCH_AUCTION = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
OTHER = "0xe7f1725E7734CE288F8367e1Bb143E90bb3F0512"


class CountingStore:
    """Backing store that counts lookups"""

    def __init__(self, answers):
        self.answers = answers
        self.calls = []

    def lookup(self, contract_name):
        self.calls.append(contract_name)
        return self.answers.get(contract_name)


def test_address_book_fill_once():
    print("Testing AddressBook fill-once...")

    book = AddressBook("localhost")
    assert book.set("dutchAuction", DUTCH_AUCTION) is True
    assert book.set("dutchAuction", DUTCH_AUCTION.lower()) is False
    assert book.get("dutchAuction") == DUTCH_AUCTION

    with pytest.raises(ValueError):
        book.set("dutchAuction", OTHER)
    with pytest.raises(ValueError):
        book.set("lpSft", "")

    assert "dutchAuction" in book
    assert len(book) == 1
    print("  AddressBook: PASSED")


def test_registry_books_are_per_network():
    print("Testing Registry...")

    registry = Registry()
    registry.record("base", "dutchAuction", DUTCH_AUCTION)

    assert registry.lookup("base", "dutchAuction") == DUTCH_AUCTION
    assert registry.lookup("mainnet", "dutchAuction") is None
    assert registry.networks() == ["base"]
    assert registry.book("mainnet").to_dict() == {}

    print("  Registry: PASSED")


def test_contract_names():
    assert get_contract_name("dutchAuction") == "DutchAuction"
    assert get_contract_name("pow5LpSftLendFarm") == "POW5LpSftLendFarm"
    assert get_contract_name("nope") is None
    assert len(set(CONTRACT_NAMES.values())) == len(CONTRACT_NAMES)


def test_static_books_bundled():
    print("Testing bundled static registries...")

    base = load_static_book("base")
    assert base["wrappedNativeToken"] == "0x4200000000000000000000000000000000000006"
    assert load_static_book("localhost") == {}

    print("  Static registries: PASSED")


def test_record_store_round_trip(tmp_path):
    print("Testing DeploymentRecordStore...")

    store = DeploymentRecordStore(tmp_path)
    assert store.load("localhost", "DutchAuction") is None

    path = store.write("localhost", "DutchAuction", DeploymentRecord(DUTCH_AUCTION, [{"type": "function"}]))
    assert path == tmp_path / "localhost" / "DutchAuction.json"
    assert json.loads(path.read_text())["address"] == DUTCH_AUCTION

    loaded = store.load("localhost", "DutchAuction")
    assert loaded.address == DUTCH_AUCTION
    assert loaded.abi == [{"type": "function"}]

    # Same address again is a no-op; a different one is refused
    store.write("localhost", "DutchAuction", DeploymentRecord(DUTCH_AUCTION))
    with pytest.raises(PreconditionViolation) as exc_info:
        store.write("localhost", "DutchAuction", DeploymentRecord(OTHER))
    assert exc_info.value.details["recorded"] == DUTCH_AUCTION
    assert exc_info.value.details["attempted"] == OTHER

    print("  DeploymentRecordStore: PASSED")


def test_record_store_ignores_bad_files(tmp_path):
    (tmp_path / "localhost").mkdir()
    (tmp_path / "localhost" / "LPSFT.json").write_text("{not json")
    (tmp_path / "localhost" / "LPNFT.json").write_text(json.dumps({"abi": []}))

    store = DeploymentRecordStore(tmp_path)
    assert store.load("localhost", "LPSFT") is None
    assert store.load("localhost", "LPNFT") is None


def test_resolver_order(tmp_path):
    print("Testing resolver lookup order...")

    records = DeploymentRecordStore(tmp_path)
    records.write("localhost", "LPSFT", DeploymentRecord(OTHER))
    backing = CountingStore({"DutchAuction": DUTCH_AUCTION, "LPSFT": "0x" + "11" * 20})
    static = {"localhost": {"usdcToken": "0x" + "22" * 20}}

    resolver = AddressResolver(Registry(), records, {"localhost": backing}, static_books=static)

    assert resolver.resolve_with_source("localhost", "usdcToken").source == AddressSource.STATIC
    # The record wins over the backing store
    assert resolver.resolve_with_source("localhost", "lpSft").address == OTHER
    assert resolver.resolve_with_source("localhost", "lpSft").source == AddressSource.BOOK
    assert resolver.resolve_with_source("localhost", "dutchAuction").source == AddressSource.BACKING_STORE
    assert backing.calls == ["DutchAuction"]

    print("  Resolver order: PASSED")


def test_resolver_queries_backing_store_once(tmp_path):
    backing = CountingStore({"DutchAuction": DUTCH_AUCTION})
    resolver = AddressResolver(Registry(), DeploymentRecordStore(tmp_path), {"localhost": backing}, static_books={})

    for _ in range(3):
        assert resolver.resolve("localhost", "dutchAuction") == DUTCH_AUCTION
    assert backing.calls == ["DutchAuction"]


def test_resolver_miss_is_none(tmp_path):
    resolver = AddressResolver(
        Registry(),
        DeploymentRecordStore(tmp_path),
        {"localhost": NullDeploymentStore()},
        static_books={},
    )

    assert resolver.resolve("localhost", "dutchAuction") is None
    assert resolver.resolve("localhost", "notAContract") is None
    assert resolver.resolve_with_source("localhost", "dutchAuction").found is False


def test_resolver_without_backing_store_for_network(tmp_path):
    backing = CountingStore({"DutchAuction": DUTCH_AUCTION})
    resolver = AddressResolver(Registry(), DeploymentRecordStore(tmp_path), {"base": backing}, static_books={})

    assert resolver.resolve("localhost", "dutchAuction") is None
    assert backing.calls == []
    assert resolver.resolve("base", "dutchAuction") == DUTCH_AUCTION


def test_resolver_address_book(tmp_path):
    resolver = AddressResolver(Registry(), DeploymentRecordStore(tmp_path), static_books={})
    resolver.registry.record("localhost", "dutchAuction", DUTCH_AUCTION)

    book = resolver.get_address_book("localhost")

    assert set(book) == set(CONTRACT_NAMES)
    assert book["dutchAuction"] == DUTCH_AUCTION
    assert book["lpSft"] is None


def _response(status_code, body=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = body
    if status_code >= 400:
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "error", request=MagicMock(), response=MagicMock(status_code=status_code)
        )
    return response


@patch("powgame.addresses.backing_store.httpx.Client")
def test_http_store_lookup(mock_client_cls):
    print("Testing HttpDeploymentStore...")

    client = mock_client_cls.return_value
    client.get.return_value = _response(200, {"address": DUTCH_AUCTION})

    store = HttpDeploymentStore("https://registry.example.org/", "base", timeout=5)
    assert store.lookup("DutchAuction") == DUTCH_AUCTION
    client.get.assert_called_once_with("https://registry.example.org/base/DutchAuction")
    mock_client_cls.assert_called_once_with(timeout=5)

    client.get.return_value = _response(404)
    assert store.lookup("LPSFT") is None

    print("  HttpDeploymentStore: PASSED")


@patch("powgame.addresses.backing_store.httpx.Client")
def test_http_store_errors(mock_client_cls):
    client = mock_client_cls.return_value
    store = HttpDeploymentStore("https://registry.example.org", "base", timeout=5)

    client.get.side_effect = httpx.ConnectError("refused")
    with pytest.raises(RpcError) as exc_info:
        store.lookup("DutchAuction")
    assert exc_info.value.recoverable

    client.get.side_effect = httpx.ReadTimeout("slow")
    with pytest.raises(RpcError):
        store.lookup("DutchAuction")

    client.get.side_effect = None
    client.get.return_value = _response(500)
    with pytest.raises(RpcError):
        store.lookup("DutchAuction")

    store.close()
    client.close.assert_called_once()


if __name__ == "__main__":
    test_address_book_fill_once()
    test_registry_books_are_per_network()
    test_contract_names()
    test_static_books_bundled()
