"""
Idempotent game administration: roles, pools and the Dutch auction bootstrap
"""

from .permission_manager import ROLE_ASSIGNMENTS, PermissionManager
from .pool_manager import PoolManager, PoolSpec, default_pool_specs
from .dutch_auction_manager import DutchAuctionManager

__all__ = [
    "ROLE_ASSIGNMENTS",
    "PermissionManager",
    "PoolManager",
    "PoolSpec",
    "default_pool_specs",
    "DutchAuctionManager",
]
