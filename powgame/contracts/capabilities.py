"""
Contract capabilities consumed by the orchestration managers

Each capability is the minimal surface one manager needs. The web3 proxies
satisfy them structurally, and so do in-memory fakes in tests.
"""

from typing import List, Protocol

from ..types import AuctionSettings, AuctionState, BureauState, TxResult


class AccessControl(Protocol):
    address: str

    def has_role(self, role: bytes, account: str) -> bool:
        ...

    def grant_role(self, role: bytes, account: str) -> TxResult:
        ...


class Erc20Balance(Protocol):
    address: str

    def balance_of(self, owner: str) -> int:
        ...

    def allowance(self, owner: str, spender: str) -> int:
        ...

    def approve(self, spender: str, amount: int) -> TxResult:
        ...

    def total_supply(self) -> int:
        ...


class WrappedNative(Erc20Balance, Protocol):
    def deposit(self, amount: int) -> TxResult:
        ...


class UniswapV3PoolLike(Protocol):
    address: str

    def sqrt_price_x96(self) -> int:
        ...

    def token0(self) -> str:
        ...

    def token1(self) -> str:
        ...

    def initialize(self, sqrt_price_x96: int) -> TxResult:
        ...


class DutchAuctionAdmin(Protocol):
    address: str

    def is_initialized(self) -> bool:
        ...

    def initialize(self, game_token_amount: int, asset_token_amount: int, receiver: str) -> TxResult:
        ...

    def get_auction_count(self) -> int:
        ...

    def set_auction_count(self, auction_count: int, dust_amount: int) -> TxResult:
        ...


class DutchAuctionMarket(Protocol):
    """Read and purchase surface used by the auction client"""

    address: str

    def get_auction_settings(self) -> AuctionSettings:
        ...

    def get_bureau_state(self) -> BureauState:
        ...

    def get_auction_count(self) -> int:
        ...

    def get_current_auctions(self) -> List[int]:
        ...

    def get_current_auction_states(self) -> List[AuctionState]:
        ...

    def get_auction_state(self, lp_nft_token_id: int) -> AuctionState:
        ...

    def get_current_price_bips(self, lp_nft_token_id: int) -> int:
        ...

    def purchase(
        self,
        lp_nft_token_id: int,
        game_token_amount: int,
        asset_token_amount: int,
        beneficiary: str,
        receiver: str,
    ) -> TxResult:
        ...
