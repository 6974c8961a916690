"""
Type definitions for the POW game tooling
"""

from .result import TxResult, TxStatus
from .address_book import (
    AddressBook,
    AddressSource,
    DeploymentRecord,
    Registry,
    ResolvedAddress,
)
from .roles import (
    RoleAssignment,
    role_id,
    ERC20_ISSUER_ROLE,
    LPSFT_ISSUER_ROLE,
    DEFI_OPERATOR_ROLE,
    ERC20_FARM_OPERATOR_ROLE,
    LPSFT_FARM_OPERATOR_ROLE,
)
from .auction import (
    AuctionSettings,
    AuctionSlot,
    AuctionState,
    BureauState,
    SlotState,
    BIPS_SCALE,
    BIPS_PER_UNIT,
)

__all__ = [
    "TxResult",
    "TxStatus",
    # Addresses
    "AddressBook",
    "AddressSource",
    "DeploymentRecord",
    "Registry",
    "ResolvedAddress",
    # Roles
    "RoleAssignment",
    "role_id",
    "ERC20_ISSUER_ROLE",
    "LPSFT_ISSUER_ROLE",
    "DEFI_OPERATOR_ROLE",
    "ERC20_FARM_OPERATOR_ROLE",
    "LPSFT_FARM_OPERATOR_ROLE",
    # Auction
    "AuctionSettings",
    "AuctionSlot",
    "AuctionState",
    "BureauState",
    "SlotState",
    "BIPS_SCALE",
    "BIPS_PER_UNIT",
]
