"""
Dutch auction slot, settings and bureau state types

All prices are "bips" scaled by 1e18: 1e18 is one basis point of the
pool's POW1 price, so 2e14 is 0.0002 bips.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


BIPS_SCALE = 10**18
BIPS_PER_UNIT = 10_000


class SlotState(Enum):
    """Lifecycle of an auction slot"""
    UNSET = "unset"
    ACTIVE = "active"
    SOLD = "sold"
    EXITED = "exited"
    REMOVED = "removed"


@dataclass(frozen=True)
class AuctionSettings:
    """
    Global auction parameters

    Attributes:
        price_decay_rate: Continuous decay rate per second, scaled by 1e18
        mint_dust_amount: Asset token dust used to mint each new LP-NFT
        price_increment: Relative increment applied to the next slot after a sale,
            scaled by 1e18 (1e18 doubles the sale price)
        initial_price_bips: Start price of a slot when nothing has sold yet
        min_price_bips: Floor of every slot's price
        max_price_bips: Ceiling on a slot's start price
    """
    price_decay_rate: int = 192_540_000_000_000
    mint_dust_amount: int = 1000
    price_increment: int = 10**18
    initial_price_bips: int = 2 * 10**14
    min_price_bips: int = 10**14
    max_price_bips: int = 10**18

    def __post_init__(self):
        if self.min_price_bips > self.max_price_bips:
            raise ValueError("min_price_bips must not exceed max_price_bips")
        if self.price_decay_rate < 0:
            raise ValueError("price_decay_rate must be non-negative")

    @classmethod
    def from_tuple(cls, values) -> "AuctionSettings":
        """Build from the contract's getAuctionSettings() return order"""
        (decay, dust, increment, initial, min_price, max_price) = values
        return cls(
            price_decay_rate=int(decay),
            mint_dust_amount=int(dust),
            price_increment=int(increment),
            initial_price_bips=int(initial),
            min_price_bips=int(min_price),
            max_price_bips=int(max_price),
        )


@dataclass(frozen=True)
class AuctionSlot:
    """
    One sellable LP-NFT in the auction

    sale_price_bips is 0 until the slot is purchased.
    """
    slot_id: int
    lp_nft_token_id: int
    start_price_bips: int
    end_price_bips: int
    start_time: int
    decay_rate: int
    max_loss: int
    sale_price_bips: int = 0
    state: SlotState = SlotState.ACTIVE

    def with_state(self, state: SlotState, sale_price_bips: Optional[int] = None) -> "AuctionSlot":
        if sale_price_bips is None:
            return replace(self, state=state)
        return replace(self, state=state, sale_price_bips=sale_price_bips)

    @property
    def is_active(self) -> bool:
        return self.state == SlotState.ACTIVE


@dataclass(frozen=True)
class AuctionState:
    """Per-LP-NFT auction state as reported by getAuctionState()"""
    lp_nft_token_id: int
    start_price_bips: int
    end_price_bips: int
    start_time: int
    sale_price: int

    @classmethod
    def from_slot(cls, slot: AuctionSlot) -> "AuctionState":
        return cls(
            lp_nft_token_id=slot.lp_nft_token_id,
            start_price_bips=slot.start_price_bips,
            end_price_bips=slot.end_price_bips,
            start_time=slot.start_time,
            sale_price=slot.sale_price_bips,
        )

    @classmethod
    def from_tuple(cls, values) -> "AuctionState":
        (token_id, start_price, end_price, start_time, sale_price) = values
        return cls(int(token_id), int(start_price), int(end_price), int(start_time), int(sale_price))


@dataclass(frozen=True)
class BureauState:
    """Global auction counters"""
    total_auctions: int
    last_sale_price_bips: int

    @classmethod
    def from_tuple(cls, values) -> "BureauState":
        (total, last_sale) = values
        return cls(total_auctions=int(total), last_sale_price_bips=int(last_sale))
