"""
Dutch auction pricing and the in-process auction model
"""

from .pricing import decay, next_start_price, price_at
from .engine import (
    FIRST_AUCTION_TOKEN_ID,
    DutchAuctionEngine,
    ExitReceipt,
    LiquidityVenue,
    PurchaseReceipt,
    tip_amount,
)

__all__ = [
    "decay",
    "next_start_price",
    "price_at",
    "FIRST_AUCTION_TOKEN_ID",
    "DutchAuctionEngine",
    "ExitReceipt",
    "LiquidityVenue",
    "PurchaseReceipt",
    "tip_amount",
]
