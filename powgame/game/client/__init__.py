"""
Player-facing clients
"""

from .dutch_auction_client import DutchAuctionClient, PriceCheck

__all__ = ["DutchAuctionClient", "PriceCheck"]
