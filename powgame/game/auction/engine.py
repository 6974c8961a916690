"""
In-process model of the Dutch auction bureau

Mirrors the on-chain auction so that prices, purchases and slot rotation
can be computed and checked without a node. Liquidity math is delegated to
a LiquidityVenue; the engine never reimplements pool arithmetic.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Protocol, Tuple

from ...errors import InvalidSlotState, SlippageExceeded
from ...types import (
    BIPS_PER_UNIT,
    BIPS_SCALE,
    AuctionSettings,
    AuctionSlot,
    AuctionState,
    BureauState,
    SlotState,
)
from .pricing import next_start_price, price_at

logger = logging.getLogger(__name__)

# LP-NFT 1 is minted when the auction is initialized and is never auctioned
FIRST_AUCTION_TOKEN_ID = 2


class LiquidityVenue(Protocol):
    """Pool-side liquidity quotes used to settle purchases and exits"""

    def quote_deposit(self, lp_nft_token_id: int, game_amount: int, asset_amount: int) -> Tuple[int, int]:
        """
        Returns:
            (game_dust, asset_dust) left over after adding the amounts as liquidity
        """
        ...

    def quote_withdraw(self, lp_nft_token_id: int) -> Tuple[int, int]:
        """
        Returns:
            (game_amount, asset_amount) released by withdrawing the position
        """
        ...


@dataclass(frozen=True)
class PurchaseReceipt:
    lp_nft_token_id: int
    sale_price_bips: int
    tip: int
    game_dust: int
    asset_dust: int
    receiver: str
    next_lp_nft_token_id: int


@dataclass(frozen=True)
class ExitReceipt:
    lp_nft_token_id: int
    game_amount: int
    asset_amount: int


def tip_amount(asset_amount: int, price_bips: int) -> int:
    """Share of the asset payment kept by the auction at a given price"""
    return asset_amount * price_bips // (BIPS_PER_UNIT * BIPS_SCALE)


class DutchAuctionEngine:
    """
    Auction slots, their prices and the rotation after each sale

    Usage:
        engine = DutchAuctionEngine(clock=lambda: now)
        engine.set_auction_count(3, dust=1000)
        receipt = engine.purchase(2, game_amount, asset_amount, receiver, venue)
    """

    def __init__(
        self,
        settings: Optional[AuctionSettings] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        self.settings = settings or AuctionSettings()
        self._clock = clock or (lambda: int(time.time()))
        self._lock = threading.Lock()
        self._slots: Dict[int, AuctionSlot] = {}
        self._active: List[int] = []
        self._next_token_id = FIRST_AUCTION_TOKEN_ID
        self._last_sale_price_bips = 0

    def now(self) -> int:
        return int(self._clock())

    # Admin actions

    def set_auction(self, slot_id: int, target_price_bips: int, decay_rate: int, max_loss: int) -> int:
        """
        Open an auction in a slot

        An active auction already holding the slot is removed and replaced.

        Returns:
            LP-NFT token id of the new auction
        """
        if slot_id < 0:
            raise ValueError(f"slot_id must be non-negative, got {slot_id}")
        with self._lock:
            for index, token_id in enumerate(self._active):
                if self._slots[token_id].slot_id == slot_id:
                    self._slots[token_id] = self._slots[token_id].with_state(SlotState.REMOVED)
                    new_id = self._open(slot_id, target_price_bips, decay_rate, max_loss)
                    self._active[index] = new_id
                    logger.info(f"Replaced LP-NFT {token_id} with {new_id} in slot {slot_id}")
                    return new_id

            new_id = self._open(slot_id, target_price_bips, decay_rate, max_loss)
            self._active.append(new_id)
            return new_id

    def set_auction_count(self, count: int, dust: int) -> List[int]:
        """
        Grow or shrink the number of concurrent auctions

        New slots start at the baseline price with `dust` as their loss
        tolerance. Shrinking removes auctions from the end of the active list.

        Returns:
            Token ids of the auctions opened by this call
        """
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        opened: List[int] = []
        with self._lock:
            while len(self._active) > count:
                token_id = self._active.pop()
                self._slots[token_id] = self._slots[token_id].with_state(SlotState.REMOVED)
                logger.info(f"Removed LP-NFT {token_id}")

            used = {self._slots[token_id].slot_id for token_id in self._active}
            free = [slot_id for slot_id in range(count) if slot_id not in used]
            start_price = next_start_price(self.settings, self._last_sale_price_bips)
            for slot_id in free[: count - len(self._active)]:
                token_id = self._open(slot_id, start_price, self.settings.price_decay_rate, dust)
                self._active.append(token_id)
                opened.append(token_id)
        return opened

    def remove_auction(self, lp_nft_token_id: int) -> None:
        with self._lock:
            slot = self._require(lp_nft_token_id, SlotState.ACTIVE)
            self._slots[lp_nft_token_id] = slot.with_state(SlotState.REMOVED)
            self._detach(lp_nft_token_id)

    # State

    def get_price(self, lp_nft_token_id: int) -> int:
        slot = self._get(lp_nft_token_id)
        if slot.state == SlotState.SOLD or slot.state == SlotState.EXITED:
            return slot.sale_price_bips
        return price_at(slot, self.now())

    def get_slot(self, lp_nft_token_id: int) -> AuctionSlot:
        return self._get(lp_nft_token_id)

    def current_auctions(self) -> List[int]:
        with self._lock:
            return list(self._active)

    def current_auction_states(self) -> List[AuctionState]:
        with self._lock:
            return [AuctionState.from_slot(self._slots[token_id]) for token_id in self._active]

    def get_auction_state(self, lp_nft_token_id: int) -> AuctionState:
        return AuctionState.from_slot(self._get(lp_nft_token_id))

    def bureau_state(self) -> BureauState:
        with self._lock:
            return BureauState(
                total_auctions=len(self._active),
                last_sale_price_bips=self._last_sale_price_bips,
            )

    # Routes

    def purchase(
        self,
        lp_nft_token_id: int,
        game_amount: int,
        asset_amount: int,
        receiver: str,
        venue: LiquidityVenue,
    ) -> PurchaseReceipt:
        """
        Buy an active LP-NFT at its current price

        The tip is taken from the asset payment; the rest is quoted as
        liquidity. If either residual exceeds the slot's max_loss nothing
        changes and SlippageExceeded is raised.

        Raises:
            InvalidSlotState: If the LP-NFT is unknown or not on sale
            SlippageExceeded: If the deposit would leave too much dust
        """
        with self._lock:
            slot = self._require(lp_nft_token_id, SlotState.ACTIVE)
            price = price_at(slot, self.now())
            tip = tip_amount(asset_amount, price)

            game_dust, asset_dust = venue.quote_deposit(lp_nft_token_id, game_amount, asset_amount - tip)
            if game_dust > slot.max_loss or asset_dust > slot.max_loss:
                raise SlippageExceeded.dust_loss(lp_nft_token_id, slot.max_loss, game_dust, asset_dust)

            self._slots[lp_nft_token_id] = slot.with_state(SlotState.SOLD, sale_price_bips=price)
            self._last_sale_price_bips = price

            index = self._detach(lp_nft_token_id)
            new_id = self._open(
                slot.slot_id,
                next_start_price(self.settings, price),
                self.settings.price_decay_rate,
                slot.max_loss,
            )
            self._active.append(new_id)

        logger.info(
            f"Sold LP-NFT {lp_nft_token_id} at {price} bips (tip {tip}), "
            f"opened {new_id} (was position {index})"
        )
        return PurchaseReceipt(
            lp_nft_token_id=lp_nft_token_id,
            sale_price_bips=price,
            tip=tip,
            game_dust=game_dust,
            asset_dust=asset_dust,
            receiver=receiver,
            next_lp_nft_token_id=new_id,
        )

    def exit(self, lp_nft_token_id: int, venue: LiquidityVenue) -> ExitReceipt:
        """
        Withdraw a sold LP-NFT's liquidity

        Raises:
            InvalidSlotState: Unless the LP-NFT has been sold and not exited
        """
        with self._lock:
            slot = self._require(lp_nft_token_id, SlotState.SOLD)
            game_amount, asset_amount = venue.quote_withdraw(lp_nft_token_id)
            self._slots[lp_nft_token_id] = slot.with_state(SlotState.EXITED)
        return ExitReceipt(lp_nft_token_id, game_amount, asset_amount)

    # Internals (callers hold the lock)

    def _open(self, slot_id: int, start_price_bips: int, decay_rate: int, max_loss: int) -> int:
        token_id = self._next_token_id
        self._next_token_id += 1
        self._slots[token_id] = AuctionSlot(
            slot_id=slot_id,
            lp_nft_token_id=token_id,
            start_price_bips=start_price_bips,
            end_price_bips=self.settings.min_price_bips,
            start_time=self.now(),
            decay_rate=decay_rate,
            max_loss=max_loss,
        )
        return token_id

    def _detach(self, lp_nft_token_id: int) -> int:
        """Drop from the active list by swapping with the last entry"""
        index = self._active.index(lp_nft_token_id)
        self._active[index] = self._active[-1]
        self._active.pop()
        return index

    def _get(self, lp_nft_token_id: int) -> AuctionSlot:
        slot = self._slots.get(lp_nft_token_id)
        if slot is None:
            raise InvalidSlotState.unknown(lp_nft_token_id)
        return slot

    def _require(self, lp_nft_token_id: int, wanted: SlotState) -> AuctionSlot:
        slot = self._get(lp_nft_token_id)
        if slot.state != wanted:
            raise InvalidSlotState.expected(lp_nft_token_id, slot.state.value, wanted.value)
        return slot
