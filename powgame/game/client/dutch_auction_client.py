"""
Read and purchase client for the on-chain Dutch auction
"""

import logging
import time
from dataclasses import dataclass
from typing import List, Optional

from ...contracts.capabilities import DutchAuctionMarket, WrappedNative
from ...types import AuctionSettings, AuctionSlot, AuctionState, BureauState, TxResult
from ...utils.fixed_math import bips_to_percent
from ..auction.pricing import price_at

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PriceCheck:
    """Chain price next to the locally computed one"""
    lp_nft_token_id: int
    chain_price_bips: int
    expected_price_bips: int
    tolerance_bips: int

    @property
    def difference(self) -> int:
        return abs(self.chain_price_bips - self.expected_price_bips)

    @property
    def matches(self) -> bool:
        return self.difference <= self.tolerance_bips


class DutchAuctionClient:
    """
    Player-side view of the Dutch auction

    Usage:
        client = DutchAuctionClient(library.dutch_auction(), library.wrapped_native(), signer.address)
        for state in client.get_current_auction_states():
            print(state.lp_nft_token_id, client.get_current_price_bips(state.lp_nft_token_id))
        client.purchase(2, 0, weth_amount, beneficiary, receiver)
    """

    def __init__(self, auction: DutchAuctionMarket, market_token: WrappedNative, account: str):
        self.auction = auction
        self.market_token = market_token
        self.account = account
        self._settings: Optional[AuctionSettings] = None

    # State

    def get_auction_settings(self) -> AuctionSettings:
        return self.auction.get_auction_settings()

    def get_bureau_state(self) -> BureauState:
        return self.auction.get_bureau_state()

    def get_current_auction_count(self) -> int:
        return self.auction.get_auction_count()

    def get_current_auctions(self) -> List[int]:
        return self.auction.get_current_auctions()

    def get_current_auction_states(self) -> List[AuctionState]:
        return self.auction.get_current_auction_states()

    def get_auction_state(self, lp_nft_token_id: int) -> AuctionState:
        return self.auction.get_auction_state(lp_nft_token_id)

    def get_current_price_bips(self, lp_nft_token_id: int) -> int:
        return self.auction.get_current_price_bips(lp_nft_token_id)

    # Routes

    def purchase(
        self,
        lp_nft_token_id: int,
        game_amount: int,
        asset_amount: int,
        beneficiary: str,
        receiver: str,
    ) -> TxResult:
        """
        Buy an LP-NFT, wrapping and approving the asset token only as needed

        Args:
            lp_nft_token_id: Auctioned LP-NFT
            game_amount: POW1 contributed to the position
            asset_amount: Wrapped native paid, including the auction tip
            beneficiary: Receives the LP-SFT
            receiver: Receives the tip
        """
        if asset_amount > 0:
            balance = self.market_token.balance_of(self.account)
            if balance < asset_amount:
                logger.info(f"Wrapping {asset_amount - balance} wei for purchase")
                self.market_token.deposit(asset_amount - balance)

            allowance = self.market_token.allowance(self.account, self.auction.address)
            if allowance < asset_amount:
                self.market_token.approve(self.auction.address, asset_amount - allowance)

        return self.auction.purchase(lp_nft_token_id, game_amount, asset_amount, beneficiary, receiver)

    # Verification

    def verify_price(
        self,
        lp_nft_token_id: int,
        now: Optional[int] = None,
        tolerance_bips: int = 0,
    ) -> PriceCheck:
        """
        Recompute an auction's price off-chain and compare with the contract

        `now` should be the timestamp the chain evaluates at (the latest
        block); wall-clock time is used when omitted.
        """
        if self._settings is None:
            self._settings = self.auction.get_auction_settings()

        state = self.auction.get_auction_state(lp_nft_token_id)
        chain_price = self.auction.get_current_price_bips(lp_nft_token_id)

        if state.sale_price:
            expected = state.sale_price
        else:
            slot = AuctionSlot(
                slot_id=0,
                lp_nft_token_id=state.lp_nft_token_id,
                start_price_bips=state.start_price_bips,
                end_price_bips=state.end_price_bips,
                start_time=state.start_time,
                decay_rate=self._settings.price_decay_rate,
                max_loss=self._settings.mint_dust_amount,
            )
            expected = price_at(slot, int(now if now is not None else time.time()))

        check = PriceCheck(lp_nft_token_id, chain_price, expected, tolerance_bips)
        if not check.matches:
            logger.warning(
                f"LP-NFT {lp_nft_token_id}: chain price {chain_price} ({bips_to_percent(chain_price)}%) "
                f"differs from expected {expected} by {check.difference}"
            )
        return check
