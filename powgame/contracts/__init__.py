"""
Contract proxies and the capabilities the managers depend on
"""

from .base import BaseContract
from .tokens import AccessControlContract, ERC20Contract, WrappedNativeContract, LpSftContract
from .pool import UniswapV3PoolContract
from .dutch_auction import DutchAuctionContract
from .capabilities import (
    AccessControl,
    Erc20Balance,
    WrappedNative,
    UniswapV3PoolLike,
    DutchAuctionAdmin,
    DutchAuctionMarket,
)
from .library import ContractLibrary

__all__ = [
    "BaseContract",
    "AccessControlContract",
    "ERC20Contract",
    "WrappedNativeContract",
    "LpSftContract",
    "UniswapV3PoolContract",
    "DutchAuctionContract",
    "AccessControl",
    "Erc20Balance",
    "WrappedNative",
    "UniswapV3PoolLike",
    "DutchAuctionAdmin",
    "DutchAuctionMarket",
    "ContractLibrary",
]
