"""
Unit tests for the game initialization entry point
"""

import base64
import json
import sys
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from powgame.config import Config, DeploymentConfig, GameConfig
from powgame.constants import INITIAL_POW1_SUPPLY
from powgame.errors import PreconditionViolation
from powgame.init import build_resolver, initialize_game

from fakes import OPERATOR, FakeErc20, FakeLibrary, FakeLpSft, FakePool, game_book

IMAGE = "data:image/svg+xml;base64,PHN2Zy8+"


def metadata_uri(metadata):
    encoded = base64.b64encode(json.dumps(metadata).encode("utf-8")).decode("ascii")
    return f"data:application/json;base64,{encoded}"


def make_config(tmp_dir="deployments"):
    return Config(
        deployment=DeploymentConfig(deployments_dir=tmp_dir, registry_url=""),
        game=GameConfig(eth_price=3498, usdc_price=1, initial_lppow1_weth_value=100, initial_lppow5_usdc_value=100),
    )


def make_library(book=None):
    library = FakeLibrary(book or game_book())
    library.register(
        "pow1Pool",
        FakePool(library.address("pow1Pool"), library.address("pow1Token"), library.address("wrappedNativeToken")),
    )
    library.register(
        "pow5Pool",
        FakePool(library.address("pow5Pool"), library.address("usdcToken"), library.address("pow5Token")),
    )
    library.register("pow1Token", FakeErc20(library.address("pow1Token"), balance=INITIAL_POW1_SUPPLY))
    library.register(
        "lpSft",
        FakeLpSft(
            library.address("lpSft"),
            token_ids={OPERATOR.lower(): [1]},
            uris={1: metadata_uri({"name": "LP-SFT #1", "image": IMAGE})},
        ),
    )
    return library


class TestInitializeGame(unittest.TestCase):
    def setUp(self):
        self.web3 = MagicMock()
        self.signer = MagicMock()
        self.signer.address = OPERATOR
        self.resolver = MagicMock()
        self.resolver.get_address_book.return_value = game_book()

    def run_init(self, library):
        with patch("powgame.init.ContractLibrary", return_value=library) as library_cls:
            report = initialize_game(
                self.web3, self.signer, network="localhost", resolver=self.resolver, cfg=make_config()
            )
        library_cls.assert_called_once_with(self.web3, self.signer, game_book())
        return report

    def test_fresh_network(self):
        library = make_library()

        report = self.run_init(library)

        self.assertEqual(report.network, "localhost")
        self.assertEqual(len(report.role_receipts), 11)
        self.assertEqual(len(report.pool_receipts), 2)
        # approve POW1, wrap, approve WETH, initialize, setAuctionCount; the
        # fake auction spends nothing, so the dust is already funded
        self.assertEqual(len(report.auction_receipts), 5)
        self.assertEqual(report.transaction_count, 18)
        self.assertEqual(report.lp_sft_token_ids, [1])
        self.assertEqual(report.lp_nft_image, IMAGE)
        self.assertTrue(library.dutch_auction().is_initialized())
        self.assertEqual(library.dutch_auction().get_auction_count(), 3)

    def test_second_run_sends_nothing(self):
        library = make_library()
        self.run_init(library)
        sent = len(library.sent())

        report = self.run_init(library)

        self.assertEqual(report.transaction_count, 0)
        self.assertEqual(len(library.sent()), sent)

    def test_missing_address_aborts_before_sending(self):
        book = game_book()
        book["yieldHarvest"] = None
        library = make_library(book)
        self.resolver.get_address_book.return_value = book

        with patch("powgame.init.ContractLibrary", return_value=library):
            with self.assertRaises(PreconditionViolation):
                initialize_game(self.web3, self.signer, network="localhost", resolver=self.resolver, cfg=make_config())

        self.assertEqual(library.sent(), [])


class TestBuildResolver(unittest.TestCase):
    def test_without_registry(self):
        resolver = build_resolver("localhost", make_config("/tmp/powgame-deployments"))

        self.assertEqual(str(resolver.records.root), "/tmp/powgame-deployments")
        self.assertEqual(resolver._backing_stores, {})

    def test_with_registry(self):
        cfg = make_config()
        cfg.deployment.registry_url = "https://registry.example.org"

        resolver = build_resolver("base", cfg)

        self.assertEqual(resolver._backing_stores["base"].network, "base")


if __name__ == "__main__":
    unittest.main()
