"""
Uniswap V3 pool proxy
"""

from ..types import TxResult
from .abis import UNISWAP_V3_POOL_ABI
from .base import BaseContract


class UniswapV3PoolContract(BaseContract):
    NAME = "UniswapV3Pool"
    ABI = UNISWAP_V3_POOL_ABI

    def sqrt_price_x96(self) -> int:
        """Current sqrtPriceX96 from slot0; zero means uninitialized"""
        return int(self._call("slot0")[0])

    def token0(self) -> str:
        return self._call("token0")

    def token1(self) -> str:
        return self._call("token1")

    def fee(self) -> int:
        return int(self._call("fee"))

    def initialize(self, sqrt_price_x96: int) -> TxResult:
        return self._transact(
            "initialize",
            sqrt_price_x96,
            description=f"initialize pool {self.address}",
        )

