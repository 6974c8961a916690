"""
Result type definitions for submitted transactions
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List


class TxStatus(Enum):
    """Transaction status"""
    SUCCESS = "success"
    FAILED = "failed"
    TIMEOUT = "timeout"
    PENDING = "pending"
    SKIPPED = "skipped"  # Desired state already held


@dataclass
class TxResult:
    """
    Transaction execution result

    Attributes:
        status: Transaction status
        tx_hash: Transaction hash (0x-prefixed hex)
        error: Error message if failed
        recoverable: Whether the error is recoverable (can retry)
        error_code: Error code for programmatic handling
        block_number: Block the transaction was mined in
        gas_used: Gas consumed by the transaction
        contract_address: Address created by a deployment transaction
        description: Short label of what was submitted (e.g. "approve POW1")
        logs: Decoded log lines, if any
    """
    status: TxStatus
    tx_hash: Optional[str] = None
    error: Optional[str] = None
    recoverable: bool = False
    error_code: Optional[str] = None
    block_number: Optional[int] = None
    gas_used: Optional[int] = None
    contract_address: Optional[str] = None
    description: Optional[str] = None
    logs: List[str] = field(default_factory=list)

    @property
    def is_success(self) -> bool:
        return self.status == TxStatus.SUCCESS

    @property
    def is_failed(self) -> bool:
        return self.status == TxStatus.FAILED

    @property
    def is_timeout(self) -> bool:
        return self.status == TxStatus.TIMEOUT

    @property
    def is_skipped(self) -> bool:
        return self.status == TxStatus.SKIPPED

    @classmethod
    def success(cls, tx_hash: Optional[str], **kwargs) -> "TxResult":
        """Create successful result"""
        return cls(status=TxStatus.SUCCESS, tx_hash=tx_hash, **kwargs)

    @classmethod
    def failed(cls, error: str, tx_hash: str = None, **kwargs) -> "TxResult":
        """Create failed result"""
        return cls(status=TxStatus.FAILED, tx_hash=tx_hash, error=error, **kwargs)

    @classmethod
    def timeout(cls, tx_hash: str = None, **kwargs) -> "TxResult":
        """Create timeout result (recoverable - can check on-chain status)"""
        return cls(
            status=TxStatus.TIMEOUT,
            tx_hash=tx_hash,
            error="Transaction confirmation timeout",
            recoverable=True,
            error_code="2003",
            **kwargs
        )

    @classmethod
    def skipped(cls, reason: str = "No action needed", **kwargs) -> "TxResult":
        """Create skipped result (no transaction was needed)"""
        return cls(status=TxStatus.SKIPPED, tx_hash=None, error=reason, **kwargs)

    @classmethod
    def from_receipt(cls, receipt: dict, description: Optional[str] = None) -> "TxResult":
        """Build a result from a signer's sign_and_send() response"""
        if receipt.get("status") == "success":
            raw = receipt.get("receipt") or {}
            return cls.success(
                receipt.get("tx_hash"),
                block_number=receipt.get("block_number"),
                gas_used=receipt.get("gas_used"),
                contract_address=raw.get("contractAddress"),
                description=description,
            )
        if receipt.get("broadcast"):
            # Broadcast without a receipt; may still be mined
            return cls(
                status=TxStatus.TIMEOUT,
                tx_hash=receipt.get("tx_hash"),
                error=receipt.get("error"),
                recoverable=False,
                error_code="2003",
                description=description,
            )
        if receipt.get("status") == "pending":
            return cls(status=TxStatus.PENDING, tx_hash=receipt.get("tx_hash"), description=description)
        return cls.failed(
            receipt.get("error") or "Transaction reverted",
            tx_hash=receipt.get("tx_hash"),
            description=description,
        )

    def __str__(self) -> str:
        label = f" {self.description}" if self.description else ""
        if self.is_success:
            hash_display = f"{self.tx_hash[:18]}..." if self.tx_hash else "no hash"
            return f"TxResult(SUCCESS{label}, {hash_display})"
        return f"TxResult({self.status.value}{label}, error={self.error})"
