"""
Pure helpers: fixed-point math, fee tiers and metadata decoding
"""

from .fixed_math import (
    encode_price_sqrt,
    decode_sqrt_price,
    decode_x128,
    to_wei,
    from_wei,
    bips_to_percent,
    Q96,
    Q128,
)
from .tick_math import (
    FeeAmount,
    LPPOW1_POOL_FEE,
    LPPOW5_POOL_FEE,
)
from .lp_nft import extract_json_from_uri

__all__ = [
    "encode_price_sqrt",
    "decode_sqrt_price",
    "decode_x128",
    "to_wei",
    "from_wei",
    "bips_to_percent",
    "Q96",
    "Q128",
    "FeeAmount",
    "LPPOW1_POOL_FEE",
    "LPPOW5_POOL_FEE",
    "extract_json_from_uri",
]
