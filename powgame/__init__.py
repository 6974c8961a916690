"""
powgame - Provisioning and orchestration for the POW game contracts

Provides:
- Address resolution across static registries, deployment records and a
  live deployment registry
- Idempotent contract deployment with persisted records
- Role, pool and Dutch auction initialization that only sends what is missing
- An off-chain model of the Dutch auction price curve and slot rotation
"""

__version__ = "0.3.0"

from .types import (
    AddressBook,
    AuctionSettings,
    AuctionSlot,
    AuctionState,
    BureauState,
    Registry,
    RoleAssignment,
    SlotState,
    TxResult,
    TxStatus,
)
from .errors import (
    ErrorCode,
    PowGameError,
    RpcError,
    TransactionReverted,
    DeploymentFailed,
    PreconditionViolation,
    PoolTokenMismatch,
    InvalidSlotState,
    SlippageExceeded,
    SignerError,
)
from .addresses import AddressResolver
from .contracts import ContractLibrary
from .deploy import DeploymentRecorder, Provisioner, default_plan
from .game.admin import DutchAuctionManager, PermissionManager, PoolManager
from .game.auction import DutchAuctionEngine, price_at
from .game.client import DutchAuctionClient
from .infra.evm_signer import EVMSigner, NodeSigner, create_signer, create_web3
from .infra.network import network_name

__all__ = [
    "__version__",
    # Types
    "AddressBook",
    "AuctionSettings",
    "AuctionSlot",
    "AuctionState",
    "BureauState",
    "Registry",
    "RoleAssignment",
    "SlotState",
    "TxResult",
    "TxStatus",
    # Errors
    "ErrorCode",
    "PowGameError",
    "RpcError",
    "TransactionReverted",
    "DeploymentFailed",
    "PreconditionViolation",
    "PoolTokenMismatch",
    "InvalidSlotState",
    "SlippageExceeded",
    "SignerError",
    # Addresses and deployment
    "AddressResolver",
    "ContractLibrary",
    "DeploymentRecorder",
    "Provisioner",
    "default_plan",
    # Game
    "DutchAuctionManager",
    "PermissionManager",
    "PoolManager",
    "DutchAuctionEngine",
    "price_at",
    "DutchAuctionClient",
    # Infrastructure
    "EVMSigner",
    "NodeSigner",
    "create_signer",
    "create_web3",
    "network_name",
]
