"""
Uniswap V3 pool price initialization
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol

from ...config import GameConfig, config as global_config
from ...constants import INITIAL_POW1_SUPPLY, INITIAL_POW5_AMOUNT, usdc_amount_for_usd, weth_amount_for_usd
from ...contracts.capabilities import UniswapV3PoolLike
from ...errors import PoolTokenMismatch, TransactionReverted
from ...types import TxResult
from ...utils.fixed_math import decode_sqrt_price, encode_price_sqrt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PoolSpec:
    """
    A pool and the reserves its initial price is derived from

    Attributes:
        name: Logical pool name in the address book
        game_token: Address of the game token (POW1 or POW5)
        asset_token: Address of the paired asset (WETH or USDC)
        game_amount: Game token reserve for the initial price
        asset_amount: Asset token reserve for the initial price
    """
    name: str
    game_token: str
    asset_token: str
    game_amount: int
    asset_amount: int

    def initial_sqrt_price(self, game_is_token0: bool) -> int:
        """sqrtPriceX96 of token1/token0 for this pool's reserves"""
        if game_is_token0:
            return encode_price_sqrt(self.asset_amount, self.game_amount)
        return encode_price_sqrt(self.game_amount, self.asset_amount)


class PoolSource(Protocol):
    def address(self, name: str) -> str:
        ...

    def pool(self, name: str) -> UniswapV3PoolLike:
        ...


def default_pool_specs(contracts: PoolSource, game_config: Optional[GameConfig] = None) -> List[PoolSpec]:
    """POW1/WETH and POW5/USDC pools seeded with $100 of asset each"""
    game_config = game_config or global_config.game
    return [
        PoolSpec(
            name="pow1Pool",
            game_token=contracts.address("pow1Token"),
            asset_token=contracts.address("wrappedNativeToken"),
            game_amount=INITIAL_POW1_SUPPLY,
            asset_amount=weth_amount_for_usd(game_config.initial_lppow1_weth_value, game_config.eth_price),
        ),
        PoolSpec(
            name="pow5Pool",
            game_token=contracts.address("pow5Token"),
            asset_token=contracts.address("usdcToken"),
            game_amount=INITIAL_POW5_AMOUNT,
            asset_amount=usdc_amount_for_usd(game_config.initial_lppow5_usdc_value, game_config.usdc_price),
        ),
    ]


# UniswapV3Pool.initialize: require(slot0.sqrtPriceX96 == 0, "AI")
_ALREADY_INITIALIZED_REASON = "AI"


def is_already_initialized(error: TransactionReverted) -> bool:
    """Whether a revert means another caller initialized the pool first"""
    reason = str(error.reason or error.message).strip().strip("'\"")
    if reason == _ALREADY_INITIALIZED_REASON or reason.endswith(f": {_ALREADY_INITIALIZED_REASON}"):
        return True
    return "already initialized" in reason.lower()


def _game_is_token0(spec: PoolSpec, pool: UniswapV3PoolLike) -> bool:
    token0 = pool.token0().lower()
    token1 = pool.token1().lower()
    game = spec.game_token.lower()
    asset = spec.asset_token.lower()

    if token0 == game and token1 == asset:
        return True
    if token0 == asset and token1 == game:
        return False
    raise PoolTokenMismatch.for_pool(spec.name, pool.address, token0, token1)


class PoolManager:
    """
    Sets the initial price of every uninitialized pool

    Usage:
        manager = PoolManager(ContractLibrary(web3, signer, book))
        receipts = manager.initialize_pools()
    """

    def __init__(self, contracts: PoolSource, game_config: Optional[GameConfig] = None):
        self._contracts = contracts
        self._game_config = game_config

    def initialize_pools(self, pools: Optional[List[PoolSpec]] = None) -> List[TxResult]:
        """
        Initialize pools whose sqrtPriceX96 is still zero

        Returns:
            Receipts of the initialize transactions that were sent

        Raises:
            PoolTokenMismatch: If a pool's tokens match neither orientation
        """
        if pools is None:
            pools = default_pool_specs(self._contracts, self._game_config)

        receipts = []
        for spec in pools:
            pool = self._contracts.pool(spec.name)

            if pool.sqrt_price_x96() != 0:
                logger.info(f"{spec.name} already initialized")
                continue

            game_is_token0 = _game_is_token0(spec, pool)
            logger.info(f"{spec.name}: game token is {'token0' if game_is_token0 else 'token1'}")

            sqrt_price = spec.initial_sqrt_price(game_is_token0)
            logger.info(f"{spec.name}: sqrtPriceX96={sqrt_price} (token1/token0 = {decode_sqrt_price(sqrt_price):.6e})")
            try:
                receipts.append(pool.initialize(sqrt_price))
            except TransactionReverted as e:
                if is_already_initialized(e):
                    logger.info(f"{spec.name} was initialized concurrently, skipping")
                    continue
                raise
        return receipts
