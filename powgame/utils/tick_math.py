"""
Uniswap V3 fee tiers of the game pools
"""

from enum import IntEnum


class FeeAmount(IntEnum):
    """Uniswap V3 fee tiers in hundredths of a bip"""
    LOW = 500  # 0.05%
    MEDIUM = 3_000  # 0.3%
    HIGH = 10_000  # 1%


LPPOW1_POOL_FEE = FeeAmount.HIGH
LPPOW5_POOL_FEE = FeeAmount.HIGH
