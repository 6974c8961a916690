"""
Dutch auction bootstrap: funding, initialization and the first auctions
"""

import logging
from typing import List, Optional

from ...constants import AUCTION_MINT_DUST, INITIAL_AUCTION_COUNT, INITIAL_POW1_SUPPLY
from ...contracts.capabilities import DutchAuctionAdmin, Erc20Balance, WrappedNative
from ...types import TxResult
from ...utils import from_wei

logger = logging.getLogger(__name__)


class DutchAuctionManager:
    """
    Brings the Dutch auction from deployed to trading

    Every step reads state first and sends only what is missing. Approvals
    and deposits are confirmed before the transaction that spends them.

    Usage:
        manager = DutchAuctionManager.from_library(library, signer.address)
        manager.initialize(INITIAL_POW1_SUPPLY, weth_amount, beneficiary)
        manager.create_initial_auctions()
    """

    def __init__(
        self,
        auction: DutchAuctionAdmin,
        game_token: Erc20Balance,
        market_token: WrappedNative,
        operator: str,
        auction_count: int = INITIAL_AUCTION_COUNT,
        mint_dust: int = AUCTION_MINT_DUST,
    ):
        self.auction = auction
        self.game_token = game_token
        self.market_token = market_token
        self.operator = operator
        self.auction_count = auction_count
        self.mint_dust = mint_dust
        self.executed: List[TxResult] = []

    @classmethod
    def from_library(cls, library, operator: str, **kwargs) -> "DutchAuctionManager":
        return cls(
            auction=library.dutch_auction(),
            game_token=library.erc20("pow1Token"),
            market_token=library.wrapped_native("wrappedNativeToken"),
            operator=operator,
            **kwargs,
        )

    def is_initialized(self) -> bool:
        return self.auction.is_initialized()

    def get_current_auction_count(self) -> int:
        return self.auction.get_auction_count()

    def _submit(self, result: TxResult) -> TxResult:
        self.executed.append(result)
        return result

    def _ensure_allowance(self, token: Erc20Balance, amount: int, label: str) -> Optional[TxResult]:
        allowance = token.allowance(self.operator, self.auction.address)
        if allowance >= amount:
            return None
        shortfall = amount - allowance
        logger.info(f"Approving {shortfall} {label} for the dutch auction")
        return self._submit(token.approve(self.auction.address, shortfall))

    def _ensure_market_balance(self, amount: int) -> Optional[TxResult]:
        balance = self.market_token.balance_of(self.operator)
        if balance >= amount:
            return None
        shortfall = amount - balance
        logger.info(f"Wrapping {from_wei(shortfall, 18)} native token")
        return self._submit(self.market_token.deposit(shortfall))

    def _check_game_supply(self) -> None:
        total_supply = self.game_token.total_supply()
        if total_supply != INITIAL_POW1_SUPPLY:
            logger.warning(f"POW1 total supply is {total_supply}, expected {INITIAL_POW1_SUPPLY}")
        balance = self.game_token.balance_of(self.operator)
        if balance != INITIAL_POW1_SUPPLY:
            logger.warning(f"Operator POW1 balance is {balance}, expected {INITIAL_POW1_SUPPLY}")

    def initialize(self, game_amount: int, asset_amount: int, receiver: str) -> Optional[TxResult]:
        """
        Fund and initialize the auction

        Args:
            game_amount: POW1 spent into the first LP-NFT
            asset_amount: Wrapped native spent into the first LP-NFT
            receiver: Address receiving the first LP-SFT

        Returns:
            The initialize receipt, or None if the auction was already initialized
        """
        if self.auction.is_initialized():
            logger.info("Dutch auction already initialized")
            return None

        self._check_game_supply()

        self._ensure_allowance(self.game_token, game_amount, "POW1")
        self._ensure_market_balance(asset_amount)
        self._ensure_allowance(self.market_token, asset_amount, "WETH")

        logger.info(
            f"Initializing dutch auction with {from_wei(game_amount, 18)} POW1 "
            f"and {from_wei(asset_amount, 18)} WETH"
        )
        return self._submit(self.auction.initialize(game_amount, asset_amount, receiver))

    def create_initial_auctions(self) -> List[TxResult]:
        """
        Open the initial auction slots if none exist

        Returns:
            Receipts of the transactions sent (empty if auctions already exist)
        """
        current = self.auction.get_auction_count()
        if current != 0:
            logger.info(f"Dutch auction already has {current} auctions")
            return []

        receipts = []
        for result in (
            self._ensure_market_balance(self.mint_dust),
            self._ensure_allowance(self.market_token, self.mint_dust, "WETH dust"),
        ):
            if result is not None:
                receipts.append(result)

        logger.info(f"Creating {self.auction_count} auctions")
        receipts.append(self._submit(self.auction.set_auction_count(self.auction_count, self.mint_dust)))
        return receipts
