"""
Dutch auction bureau proxy
"""

from typing import List

from web3 import Web3

from ..types import AuctionSettings, AuctionState, BureauState, TxResult
from .abis import DUTCH_AUCTION_ABI
from .base import BaseContract


class DutchAuctionContract(BaseContract):
    NAME = "DutchAuction"
    ABI = DUTCH_AUCTION_ABI

    # Admin actions

    def is_initialized(self) -> bool:
        return bool(self._call("isInitialized"))

    def initialize(self, game_token_amount: int, asset_token_amount: int, receiver: str) -> TxResult:
        return self._transact(
            "initialize",
            game_token_amount,
            asset_token_amount,
            Web3.to_checksum_address(receiver),
            description="initialize dutch auction",
        )

    def set_auction_count(self, auction_count: int, dust_amount: int) -> TxResult:
        return self._transact(
            "setAuctionCount",
            auction_count,
            dust_amount,
            description=f"setAuctionCount({auction_count})",
        )

    def set_auction(self, slot: int, target_price: int, price_decay_constant: int, dust_loss_amount: int) -> TxResult:
        return self._transact("setAuction", slot, target_price, price_decay_constant, dust_loss_amount)

    def remove_auction(self, slot: int) -> TxResult:
        return self._transact("removeAuction", slot)

    # State

    def get_auction_count(self) -> int:
        return int(self._call("getAuctionCount"))

    def get_current_auctions(self) -> List[int]:
        return [int(token_id) for token_id in self._call("getCurrentAuctions")]

    def get_price(self, slot: int) -> int:
        return int(self._call("getPrice", slot))

    def get_current_price_bips(self, lp_nft_token_id: int) -> int:
        return int(self._call("getCurrentPriceBips", lp_nft_token_id))

    def get_auction_settings(self) -> AuctionSettings:
        return AuctionSettings.from_tuple(self._call("getAuctionSettings"))

    def get_bureau_state(self) -> BureauState:
        return BureauState.from_tuple(self._call("getBureauState"))

    def get_auction_state(self, lp_nft_token_id: int) -> AuctionState:
        return AuctionState.from_tuple(self._call("getAuctionState", lp_nft_token_id))

    def get_current_auction_states(self) -> List[AuctionState]:
        return [AuctionState.from_tuple(state) for state in self._call("getCurrentAuctionStates")]

    # Routes

    def purchase(
        self,
        lp_nft_token_id: int,
        game_token_amount: int,
        asset_token_amount: int,
        beneficiary: str,
        receiver: str,
    ) -> TxResult:
        return self._transact(
            "purchase",
            lp_nft_token_id,
            game_token_amount,
            asset_token_amount,
            Web3.to_checksum_address(beneficiary),
            Web3.to_checksum_address(receiver),
            description=f"purchase LP-NFT {lp_nft_token_id}",
        )

    def exit(self, lp_nft_token_id: int) -> TxResult:
        return self._transact("exit", lp_nft_token_id, description=f"exit LP-NFT {lp_nft_token_id}")
