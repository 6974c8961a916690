"""
Dutch auction price curve

    price(t) = max(end, floor(start * exp(-rate / 1e18 * (t - start_time))))

Evaluated with Decimal at 50 significant digits so the floor matches the
contract's fixed-point result for the elapsed times that matter.
"""

from decimal import ROUND_FLOOR, Decimal, localcontext

from ...types import BIPS_SCALE, AuctionSettings, AuctionSlot

PRICE_PRECISION = 50


def decay(start_price_bips: int, end_price_bips: int, decay_rate: int, elapsed: int) -> int:
    """Price after `elapsed` seconds of continuous exponential decay"""
    if elapsed <= 0 or decay_rate == 0:
        return max(end_price_bips, start_price_bips)

    with localcontext() as ctx:
        ctx.prec = PRICE_PRECISION
        exponent = -(Decimal(decay_rate) / Decimal(BIPS_SCALE)) * Decimal(elapsed)
        value = Decimal(start_price_bips) * exponent.exp()
        decayed = int(value.to_integral_value(rounding=ROUND_FLOOR))

    return max(end_price_bips, decayed)


def price_at(slot: AuctionSlot, timestamp: int) -> int:
    """
    Price of a slot at a unix timestamp

    Non-increasing in time and bounded by [end_price_bips, start_price_bips].
    Timestamps before the slot started read as the start price.
    """
    return decay(
        slot.start_price_bips,
        slot.end_price_bips,
        slot.decay_rate,
        timestamp - slot.start_time,
    )


def next_start_price(settings: AuctionSettings, last_sale_price_bips: int) -> int:
    """
    Start price of a slot opened after a sale

    The sale price raised by the relative increment, clamped to the
    configured range. With no sale yet the initial price applies.
    """
    if last_sale_price_bips <= 0:
        return settings.initial_price_bips

    raised = last_sale_price_bips * (BIPS_SCALE + settings.price_increment) // BIPS_SCALE
    return min(settings.max_price_bips, max(settings.min_price_bips, raised))
