"""
Fixed-Point Math Helpers

Conversions between human amounts and the Q64.96 / X128 fixed-point
representations used by Uniswap V3 pools.
"""

import math
from decimal import Decimal, localcontext, ROUND_FLOOR
from typing import Union

from ..types.auction import BIPS_SCALE

Q96 = 2**96
Q128 = 2**128
Q192 = 2**192

# Enough digits to keep 256-bit integers exact
_PRECISION = 80


def encode_price_sqrt(reserve1: int, reserve0: int) -> int:
    """
    Encode the price reserve1/reserve0 as a Q64.96 square root price

    Computes floor(sqrt(reserve1 / reserve0) * 2**96) with exact integer
    arithmetic.

    Args:
        reserve1: Amount of token1
        reserve0: Amount of token0

    Returns:
        sqrtPriceX96

    Raises:
        ValueError: If reserve0 is zero or either reserve is negative
    """
    if reserve0 == 0:
        raise ValueError("reserve0 must be nonzero")
    if reserve0 < 0 or reserve1 < 0:
        raise ValueError("reserves must be non-negative")
    return math.isqrt(reserve1 * Q192 // reserve0)


def decode_sqrt_price(sqrt_price_x96: int) -> Decimal:
    """Recover reserve1/reserve0 from a Q64.96 square root price"""
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        ratio = Decimal(sqrt_price_x96) / Decimal(Q96)
        return +(ratio * ratio)


def decode_x128(x128_int: int) -> int:
    """Integer part of an X128 fixed-point value"""
    return x128_int >> 128


def to_wei(amount: Union[Decimal, int, str], decimals: int) -> int:
    """
    Convert a human amount to raw units, rounding down

    Example:
        to_wei("0.0286", 18) == 28_600_000_000_000_000
    """
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        scaled = Decimal(str(amount)) * (Decimal(10) ** decimals)
        return int(scaled.to_integral_value(rounding=ROUND_FLOOR))


def from_wei(raw: int, decimals: int) -> Decimal:
    """Convert raw units to a human amount"""
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return Decimal(raw) / (Decimal(10) ** decimals)


def bips_to_percent(price_bips: int) -> Decimal:
    """
    Convert a 1e18-scaled bips value to a percentage

    1e18 is one basis point, which is 0.01%.
    """
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return Decimal(price_bips) / Decimal(BIPS_SCALE) / Decimal(100)
