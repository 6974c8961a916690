"""
Error definitions for the POW game tooling
"""

from .exceptions import (
    ErrorCode,
    PowGameError,
    RpcError,
    TransactionReverted,
    DeploymentFailed,
    ArtifactNotFound,
    PreconditionViolation,
    PoolTokenMismatch,
    InvalidSlotState,
    SlippageExceeded,
    SignerError,
    ConfigurationError,
)

__all__ = [
    "ErrorCode",
    "PowGameError",
    "RpcError",
    "TransactionReverted",
    "DeploymentFailed",
    "ArtifactNotFound",
    "PreconditionViolation",
    "PoolTokenMismatch",
    "InvalidSlotState",
    "SlippageExceeded",
    "SignerError",
    "ConfigurationError",
]
