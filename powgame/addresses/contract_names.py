"""
Logical address-book keys and their deployment (contract) names

The logical name is the key used in code and in the static registry JSON.
The contract name is the file stem of the deployment record
(deployments/<network>/<ContractName>.json) and the name the backing store
knows the deployment by.
"""

from typing import Dict, List, Optional

# Game contracts
DEFI_MANAGER_CONTRACT = "DeFiManager"
DUTCH_AUCTION_CONTRACT = "DutchAuction"
LIQUIDITY_FORGE_CONTRACT = "LiquidityForge"
LPNFT_CONTRACT = "LPNFT"
LPPOW1_TOKEN_CONTRACT = "LPPOW1"
LPPOW5_TOKEN_CONTRACT = "LPPOW5"
LPSFT_CONTRACT = "LPSFT"
NOLPSFT_CONTRACT = "NOLPSFT"
NOPOW5_TOKEN_CONTRACT = "NOPOW5"
POW1_TOKEN_CONTRACT = "POW1"
POW5_TOKEN_CONTRACT = "POW5"
POW1_LPNFT_STAKE_FARM_CONTRACT = "POW1LpNftStakeFarm"
POW1_LPSFT_LEND_FARM_CONTRACT = "POW1LpSftLendFarm"
POW5_INTEREST_FARM_CONTRACT = "POW5InterestFarm"
POW5_LPNFT_STAKE_FARM_CONTRACT = "POW5LpNftStakeFarm"
POW5_LPSFT_LEND_FARM_CONTRACT = "POW5LpSftLendFarm"
POW1_POOL_CONTRACT = "POW1Pool"
POW1_POOL_FACTORY_CONTRACT = "POW1PoolFactory"
POW1_POOLER_CONTRACT = "POW1Pooler"
POW1_STAKER_CONTRACT = "POW1Staker"
POW1_SWAPPER_CONTRACT = "POW1Swapper"
POW5_POOL_CONTRACT = "POW5Pool"
POW5_POOL_FACTORY_CONTRACT = "POW5PoolFactory"
POW5_POOLER_CONTRACT = "POW5Pooler"
POW5_STAKER_CONTRACT = "POW5Staker"
POW5_SWAPPER_CONTRACT = "POW5Swapper"
REVERSE_REPO_CONTRACT = "ReverseRepo"
YIELD_HARVEST_CONTRACT = "YieldHarvest"

# External dependencies
UNISWAP_V3_FACTORY_CONTRACT = "UniswapV3Factory"
UNISWAP_V3_NFT_DESCRIPTOR_CONTRACT = "NonfungibleTokenPositionDescriptor"
UNISWAP_V3_NFT_MANAGER_CONTRACT = "NonfungiblePositionManager"
UNISWAP_V3_STAKER_CONTRACT = "UniswapV3Staker"
USDC_CONTRACT = "USDC"
WRAPPED_NATIVE_TOKEN_CONTRACT = "WETH"
WRAPPED_NATIVE_USDC_POOL_CONTRACT = "WrappedNativeUsdcPool"
WRAPPED_NATIVE_USDC_POOL_FACTORY_CONTRACT = "WrappedNativeUsdcPoolFactory"


CONTRACT_NAMES: Dict[str, str] = {
    "defiManager": DEFI_MANAGER_CONTRACT,
    "dutchAuction": DUTCH_AUCTION_CONTRACT,
    "liquidityForge": LIQUIDITY_FORGE_CONTRACT,
    "lpNft": LPNFT_CONTRACT,
    "lpPow1Token": LPPOW1_TOKEN_CONTRACT,
    "lpPow5Token": LPPOW5_TOKEN_CONTRACT,
    "lpSft": LPSFT_CONTRACT,
    "noLpSft": NOLPSFT_CONTRACT,
    "noPow5Token": NOPOW5_TOKEN_CONTRACT,
    "pow1LpNftStakeFarm": POW1_LPNFT_STAKE_FARM_CONTRACT,
    "pow1LpSftLendFarm": POW1_LPSFT_LEND_FARM_CONTRACT,
    "pow1Pool": POW1_POOL_CONTRACT,
    "pow1PoolFactory": POW1_POOL_FACTORY_CONTRACT,
    "pow1Pooler": POW1_POOLER_CONTRACT,
    "pow1Staker": POW1_STAKER_CONTRACT,
    "pow1Swapper": POW1_SWAPPER_CONTRACT,
    "pow1Token": POW1_TOKEN_CONTRACT,
    "pow5InterestFarm": POW5_INTEREST_FARM_CONTRACT,
    "pow5LpNftStakeFarm": POW5_LPNFT_STAKE_FARM_CONTRACT,
    "pow5LpSftLendFarm": POW5_LPSFT_LEND_FARM_CONTRACT,
    "pow5Pool": POW5_POOL_CONTRACT,
    "pow5PoolFactory": POW5_POOL_FACTORY_CONTRACT,
    "pow5Pooler": POW5_POOLER_CONTRACT,
    "pow5Staker": POW5_STAKER_CONTRACT,
    "pow5Swapper": POW5_SWAPPER_CONTRACT,
    "pow5Token": POW5_TOKEN_CONTRACT,
    "reverseRepo": REVERSE_REPO_CONTRACT,
    "uniswapV3Factory": UNISWAP_V3_FACTORY_CONTRACT,
    "uniswapV3NftDescriptor": UNISWAP_V3_NFT_DESCRIPTOR_CONTRACT,
    "uniswapV3NftManager": UNISWAP_V3_NFT_MANAGER_CONTRACT,
    "uniswapV3Staker": UNISWAP_V3_STAKER_CONTRACT,
    "usdcToken": USDC_CONTRACT,
    "wrappedNativeToken": WRAPPED_NATIVE_TOKEN_CONTRACT,
    "wrappedNativeUsdcPool": WRAPPED_NATIVE_USDC_POOL_CONTRACT,
    "wrappedNativeUsdcPoolFactory": WRAPPED_NATIVE_USDC_POOL_FACTORY_CONTRACT,
    "yieldHarvest": YIELD_HARVEST_CONTRACT,
}


def get_contract_name(logical_name: str) -> Optional[str]:
    """Deployment name for a logical key, or None if the key is unknown"""
    return CONTRACT_NAMES.get(logical_name)


def list_logical_names() -> List[str]:
    return sorted(CONTRACT_NAMES)
