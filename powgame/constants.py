"""
Token and DeFi constants for the POW game
"""

# =============================================================================
# Token decimals
# =============================================================================

POW1_DECIMALS = 18
POW5_DECIMALS = 15
LPPOW1_DECIMALS = 15
LPPOW5_DECIMALS = 9
NOPOW5_DECIMALS = 15
USDC_DECIMALS = 6
WETH_DECIMALS = 18

# =============================================================================
# Initial supply
# =============================================================================

INITIAL_POW1_SUPPLY = 10_000 * 10**POW1_DECIMALS  # 10,000 POW1 ($100)
INITIAL_POW5_DEPOSIT = 2_000 * 10**POW5_DECIMALS  # 2,000 POW5 ($100)

# =============================================================================
# DeFi
# =============================================================================

INITIAL_POW1_PRICE = "0.01"  # USD
INITIAL_POW5_PRICE = "0.05"  # USD
INITIAL_LPPOW1_WETH_VALUE = 100  # USD
INITIAL_LPPOW5_USDC_VALUE = 100  # USD
INITIAL_LPPOW1_AMOUNT = 16_907_916_618_206_111_794  # ~16,908 LPPOW1
INITIAL_POW5_AMOUNT = INITIAL_LPPOW1_AMOUNT * 99 // 100  # 99% of LPPOW1
INITIAL_LPPOW5_AMOUNT = 14_142_135_623_730  # ~14 LPPOW5

# Reward rate passed to every farm constructor
FARM_REWARD_RATE = 10**18

# =============================================================================
# Dutch auction bootstrap
# =============================================================================

INITIAL_AUCTION_COUNT = 3
AUCTION_MINT_DUST = 1000  # wei of wrapped native per minted LP-NFT

# Residual left outside the POW1 pool after the first LP-NFT is minted
EXPECTED_POW1_DUST = 443
EXPECTED_WETH_DUST = 1

# =============================================================================
# Utility
# =============================================================================

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def weth_amount_for_usd(usd_value: int, eth_price: int) -> int:
    """Wei of WETH worth `usd_value` dollars at `eth_price` dollars per ETH"""
    if eth_price <= 0:
        raise ValueError("eth_price must be positive")
    return usd_value * 10**WETH_DECIMALS // eth_price


def usdc_amount_for_usd(usd_value: int, usdc_price: int = 1) -> int:
    if usdc_price <= 0:
        raise ValueError("usdc_price must be positive")
    return usd_value * 10**USDC_DECIMALS // usdc_price
