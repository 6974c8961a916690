"""
Infrastructure layer

Provides:
- EVMSigner / NodeSigner: transaction signing via web3.py and eth-account
- create_web3 / create_signer: connection and account factories
- network_name: deployment network name normalization
- execute_with_retry: retry with correlation-ID logging
"""

from .evm_signer import (
    EVMSigner,
    NodeSigner,
    NonceManager,
    Signer,
    create_web3,
    create_signer,
    get_nonce_manager,
)
from .network import network_name, LOCAL_NETWORK
from .retry import (
    CorrelationContext,
    classify_error,
    execute_with_retry,
    get_correlation_id,
)

__all__ = [
    "EVMSigner",
    "NodeSigner",
    "NonceManager",
    "Signer",
    "create_web3",
    "create_signer",
    "get_nonce_manager",
    "network_name",
    "LOCAL_NETWORK",
    "CorrelationContext",
    "classify_error",
    "execute_with_retry",
    "get_correlation_id",
]
