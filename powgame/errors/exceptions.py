"""
Exception definitions for the POW game tooling
"""

from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    """
    Unified error codes

    1xxx - RPC errors
    2xxx - Transaction errors
    3xxx - Auction/price errors
    4xxx - Pool errors
    5xxx - Deployment/address errors
    6xxx - Signer errors
    8xxx - Precondition errors
    9xxx - Configuration errors
    """
    # RPC errors (recoverable)
    RPC_CONNECTION_FAILED = "1001"
    RPC_TIMEOUT = "1002"
    RPC_RATE_LIMITED = "1003"
    RPC_INVALID_RESPONSE = "1004"

    # Transaction errors
    TX_SEND_FAILED = "2001"
    TX_REVERTED = "2002"
    TX_CONFIRMATION_FAILED = "2003"

    # Auction/price errors
    SLIPPAGE_EXCEEDED = "3001"

    # Pool errors
    POOL_TOKEN_MISMATCH = "4001"

    # Deployment/address errors
    DEPLOYMENT_FAILED = "5001"
    ARTIFACT_NOT_FOUND = "5002"

    # Signer errors
    SIGNER_NOT_CONFIGURED = "6001"
    SIGNER_FAILED = "6002"

    # Precondition errors
    PRECONDITION_VIOLATED = "8001"
    INVALID_SLOT_STATE = "8002"

    # Configuration errors
    CONFIG_INVALID = "9001"
    CONFIG_MISSING = "9002"


class PowGameError(Exception):
    """
    Base exception for all POW game errors

    Attributes:
        message: Human-readable error message
        code: Error code for programmatic handling
        recoverable: Whether the error might succeed on retry
        original_error: The underlying exception if any
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        recoverable: bool = False,
        original_error: Optional[Exception] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.recoverable = recoverable
        self.original_error = original_error
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"

    @property
    def should_retry(self) -> bool:
        """Indicate if the operation should be retried"""
        return self.recoverable


class RpcError(PowGameError):
    """
    RPC-related errors - typically recoverable

    Raised when:
    - Connection to the JSON-RPC node or deployment registry fails
    - Request times out
    - Invalid response received
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.RPC_CONNECTION_FAILED,
        original_error: Optional[Exception] = None,
        endpoint: Optional[str] = None,
    ):
        super().__init__(
            message,
            code,
            recoverable=True,
            original_error=original_error,
            details={"endpoint": endpoint} if endpoint else None,
        )
        self.endpoint = endpoint

    @classmethod
    def connection_failed(cls, endpoint: str, error: Exception = None) -> "RpcError":
        return cls(
            f"Failed to connect to endpoint: {endpoint}",
            ErrorCode.RPC_CONNECTION_FAILED,
            original_error=error,
            endpoint=endpoint,
        )

    @classmethod
    def timeout(cls, endpoint: str, timeout_seconds: float) -> "RpcError":
        return cls(
            f"Request timed out after {timeout_seconds}s",
            ErrorCode.RPC_TIMEOUT,
            endpoint=endpoint,
        )

    @classmethod
    def invalid_response(cls, endpoint: str, reason: str) -> "RpcError":
        return cls(
            f"Invalid response from {endpoint}: {reason}",
            ErrorCode.RPC_INVALID_RESPONSE,
            endpoint=endpoint,
        )


class TransactionReverted(PowGameError):
    """
    A submitted transaction failed

    Raised when:
    - The node rejects the transaction before it is mined
    - The transaction is mined with status 0
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.TX_REVERTED,
        tx_hash: Optional[str] = None,
        reason: Optional[str] = None,
        recoverable: bool = False,
    ):
        super().__init__(
            message,
            code,
            recoverable=recoverable,
            details={"tx_hash": tx_hash, "reason": reason},
        )
        self.tx_hash = tx_hash
        self.reason = reason

    @classmethod
    def reverted(cls, operation: str, tx_hash: Optional[str] = None, reason: Optional[str] = None) -> "TransactionReverted":
        suffix = f": {reason}" if reason else ""
        return cls(
            f"{operation} reverted{suffix}",
            ErrorCode.TX_REVERTED,
            tx_hash=tx_hash,
            reason=reason,
        )

    @classmethod
    def unconfirmed(cls, operation: str, tx_hash: str, error: Optional[str] = None) -> "TransactionReverted":
        # Broadcast without a receipt; never resent
        return cls(
            f"{operation} sent as {tx_hash} but not confirmed: {error or 'no receipt'}",
            ErrorCode.TX_CONFIRMATION_FAILED,
            tx_hash=tx_hash,
            reason=error,
        )

    @classmethod
    def send_failed(cls, operation: str, error: str) -> "TransactionReverted":
        # Network failures while sending may succeed on retry
        recoverable = "timeout" in error.lower() or "connection" in error.lower()
        return cls(
            f"Failed to send {operation}: {error}",
            ErrorCode.TX_SEND_FAILED,
            reason=error,
            recoverable=recoverable,
        )


class DeploymentFailed(PowGameError):
    """
    Contract deployment failed - no record is written

    Raised when:
    - The deployment transaction reverts or is rejected
    - The receipt carries no contract address
    """

    def __init__(
        self,
        message: str,
        contract_name: Optional[str] = None,
        tx_hash: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message,
            ErrorCode.DEPLOYMENT_FAILED,
            recoverable=False,
            original_error=original_error,
            details={"contract_name": contract_name, "tx_hash": tx_hash},
        )
        self.contract_name = contract_name
        self.tx_hash = tx_hash

    @classmethod
    def reverted(cls, contract_name: str, tx_hash: Optional[str], error: Optional[str] = None) -> "DeploymentFailed":
        suffix = f": {error}" if error else ""
        return cls(
            f"Deployment of {contract_name} failed{suffix}",
            contract_name=contract_name,
            tx_hash=tx_hash,
        )


class ArtifactNotFound(PowGameError):
    """Compiled contract artifact is missing or malformed"""

    def __init__(self, message: str, contract_name: Optional[str] = None):
        super().__init__(
            message,
            ErrorCode.ARTIFACT_NOT_FOUND,
            recoverable=False,
            details={"contract_name": contract_name},
        )
        self.contract_name = contract_name

    @classmethod
    def missing(cls, contract_name: str, search_root: str) -> "ArtifactNotFound":
        return cls(
            f"No artifact for {contract_name} under {search_root}",
            contract_name=contract_name,
        )


class PreconditionViolation(PowGameError):
    """
    Structural precondition failed - fatal, never retried

    Raised when:
    - A required address is missing from the address book
    - A referenced deployment has not been provisioned
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.PRECONDITION_VIOLATED,
        details: Optional[dict] = None,
    ):
        super().__init__(message, code, recoverable=False, details=details)

    @classmethod
    def missing_address(cls, name: str) -> "PreconditionViolation":
        return cls(
            f"Address book has no entry for '{name}'",
            details={"name": name},
        )


class PoolTokenMismatch(PreconditionViolation):
    """Neither orientation of the pool's tokens matches the expected pair"""

    def __init__(
        self,
        message: str,
        pool_address: Optional[str] = None,
        token0: Optional[str] = None,
        token1: Optional[str] = None,
    ):
        super().__init__(
            message,
            ErrorCode.POOL_TOKEN_MISMATCH,
            details={"pool_address": pool_address, "token0": token0, "token1": token1},
        )
        self.pool_address = pool_address
        self.token0 = token0
        self.token1 = token1

    @classmethod
    def for_pool(cls, pool_name: str, pool_address: str, token0: str, token1: str) -> "PoolTokenMismatch":
        return cls(
            f"{pool_name} pool tokens are incorrect: token0={token0}, token1={token1}",
            pool_address=pool_address,
            token0=token0,
            token1=token1,
        )


class InvalidSlotState(PreconditionViolation):
    """Auction slot is not in a state that allows the requested transition"""

    def __init__(
        self,
        message: str,
        token_id: Optional[int] = None,
        state: Optional[str] = None,
    ):
        super().__init__(
            message,
            ErrorCode.INVALID_SLOT_STATE,
            details={"token_id": token_id, "state": state},
        )
        self.token_id = token_id
        self.state = state

    @classmethod
    def expected(cls, token_id: int, actual: str, wanted: str) -> "InvalidSlotState":
        return cls(
            f"LP-NFT {token_id} is {actual}, expected {wanted}",
            token_id=token_id,
            state=actual,
        )

    @classmethod
    def unknown(cls, token_id: int) -> "InvalidSlotState":
        return cls(f"No auction for LP-NFT {token_id}", token_id=token_id, state="unset")


class SlippageExceeded(PowGameError):
    """
    Purchase would lose more than the slot's tolerance entering the pool

    The purchase is rejected atomically: no slot or token state changes.
    """

    def __init__(
        self,
        message: str,
        max_loss: Optional[int] = None,
        game_dust: Optional[int] = None,
        asset_dust: Optional[int] = None,
    ):
        super().__init__(
            message,
            ErrorCode.SLIPPAGE_EXCEEDED,
            recoverable=False,
            details={
                "max_loss": max_loss,
                "game_dust": game_dust,
                "asset_dust": asset_dust,
            },
        )
        self.max_loss = max_loss
        self.game_dust = game_dust
        self.asset_dust = asset_dust

    @classmethod
    def dust_loss(cls, token_id: int, max_loss: int, game_dust: int, asset_dust: int) -> "SlippageExceeded":
        return cls(
            f"Purchase of LP-NFT {token_id} loses game={game_dust}, asset={asset_dust} (limit: {max_loss})",
            max_loss=max_loss,
            game_dust=game_dust,
            asset_dust=asset_dust,
        )


class SignerError(PowGameError):
    """
    Signing-related errors

    Raised when:
    - No signer configured
    - Signing operation fails
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.SIGNER_FAILED,
        recoverable: bool = False,
    ):
        super().__init__(message, code, recoverable=recoverable)

    @classmethod
    def not_configured(cls) -> "SignerError":
        return cls(
            "No signer configured. Provide MNEMONIC or run against a node with unlocked accounts.",
            ErrorCode.SIGNER_NOT_CONFIGURED,
        )

    @classmethod
    def failed(cls, reason: str) -> "SignerError":
        return cls(f"Signing failed: {reason}", ErrorCode.SIGNER_FAILED)


class ConfigurationError(PowGameError):
    """
    Configuration-related errors

    Raised when:
    - Required configuration is missing
    - Configuration values are invalid
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_INVALID,
    ):
        super().__init__(message, code, recoverable=False)

    @classmethod
    def missing(cls, param: str) -> "ConfigurationError":
        return cls(f"Missing required configuration: {param}", ErrorCode.CONFIG_MISSING)

    @classmethod
    def invalid(cls, param: str, reason: str) -> "ConfigurationError":
        return cls(f"Invalid configuration '{param}': {reason}", ErrorCode.CONFIG_INVALID)
