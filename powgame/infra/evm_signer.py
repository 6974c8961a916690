"""
EVM Transaction Signers using web3.py

Two ways to act as the deployer/operator account:
- EVMSigner: local key (private key or BIP-39 mnemonic), signs locally
  with thread-safe nonce management
- NodeSigner: an account managed by the node (hardhat/anvil), by index
"""

import logging
import threading
import time
from typing import Optional, Dict, Any, Tuple, Union

from web3 import Web3, HTTPProvider
from eth_account import Account
from eth_account.signers.local import LocalAccount

from ..errors import SignerError

logger = logging.getLogger(__name__)

# Errors raised before the transaction reached the mempool; the nonce is still free
_PRE_SEND_ERRORS = (
    "nonce too low",
    "replacement transaction",
    "insufficient funds",
    "gas too low",
    "invalid sender",
)


# Receipt polls for a transaction that is already broadcast
_RECEIPT_POLL_ATTEMPTS = 3
_RECEIPT_POLL_DELAY = 2.0

class NonceManager:
    """
    Thread-safe nonce manager for EVM transactions.

    Usage:
        nonce_mgr = NonceManager()
        nonce = nonce_mgr.get_nonce(web3, address)
        # ... send transaction ...
        nonce_mgr.confirm_nonce(address, nonce)  # On success
        # or
        nonce_mgr.release_nonce(address, nonce)  # On failure before broadcast
    """

    def __init__(self):
        self._lock = threading.Lock()
        # {address: next_nonce}
        self._pending_nonces: Dict[str, int] = {}
        # {address: set of nonces sent but not confirmed}
        self._in_flight: Dict[str, set] = {}

    def get_nonce(self, web3: Web3, address: str) -> int:
        """Get the next available nonce for an address (thread-safe)."""
        address = address.lower()

        with self._lock:
            chain_nonce = web3.eth.get_transaction_count(Web3.to_checksum_address(address), "pending")
            tracked_nonce = self._pending_nonces.get(address, chain_nonce)

            # Transactions may have been sent outside this manager
            next_nonce = max(chain_nonce, tracked_nonce)

            self._pending_nonces[address] = next_nonce + 1
            self._in_flight.setdefault(address, set()).add(next_nonce)

            logger.debug(
                f"NonceManager: address={address[:10]}... "
                f"chain={chain_nonce} tracked={tracked_nonce} assigned={next_nonce}"
            )
            return next_nonce

    def confirm_nonce(self, address: str, nonce: int) -> None:
        address = address.lower()
        with self._lock:
            if address in self._in_flight:
                self._in_flight[address].discard(nonce)

    def release_nonce(self, address: str, nonce: int) -> None:
        """Release a nonce whose transaction never reached the network."""
        address = address.lower()

        with self._lock:
            if address in self._in_flight:
                self._in_flight[address].discard(nonce)

            # Only the most recent nonce can be handed out again
            current_pending = self._pending_nonces.get(address, 0)
            if nonce == current_pending - 1:
                self._pending_nonces[address] = nonce
                logger.debug(f"NonceManager: released nonce {nonce} for {address[:10]}...")

    def reset(self, address: Optional[str] = None) -> None:
        """Reset nonce tracking, forcing re-sync with chain."""
        with self._lock:
            if address:
                address = address.lower()
                self._pending_nonces.pop(address, None)
                self._in_flight.pop(address, None)
            else:
                self._pending_nonces.clear()
                self._in_flight.clear()


_nonce_manager = NonceManager()


def get_nonce_manager() -> NonceManager:
    """Get the global nonce manager instance."""
    return _nonce_manager


def _receipt_response(tx_hash, receipt) -> Dict[str, Any]:
    return {
        "status": "success" if receipt["status"] == 1 else "failed",
        "tx_hash": Web3.to_hex(tx_hash),
        "block_number": receipt["blockNumber"],
        "gas_used": receipt["gasUsed"],
        "effective_gas_price": receipt.get("effectiveGasPrice", 0),
        "receipt": dict(receipt),
    }


def _await_broadcast(web3: Web3, tx_hash, timeout: int, first_error: Exception) -> Dict[str, Any]:
    """
    Keep waiting on a transaction that already reached the node

    Never re-sends. If no receipt turns up the failure keeps the hash, so the
    caller knows the transaction may still be mined and must not retry it.
    """
    last_error = first_error
    for attempt in range(_RECEIPT_POLL_ATTEMPTS):
        logger.warning(
            f"Receipt wait for {Web3.to_hex(tx_hash)} failed ({last_error}), "
            f"polling again ({attempt + 1}/{_RECEIPT_POLL_ATTEMPTS})"
        )
        time.sleep(_RECEIPT_POLL_DELAY * (attempt + 1))
        try:
            receipt = web3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout)
            return _receipt_response(tx_hash, receipt)
        except Exception as e:
            last_error = e

    logger.error(f"No receipt for broadcast transaction {Web3.to_hex(tx_hash)}: {last_error}")
    return {
        "status": "failed",
        "error": f"no receipt for broadcast transaction: {last_error}",
        "tx_hash": Web3.to_hex(tx_hash),
        "broadcast": True,
    }


class EVMSigner:
    """
    Local EVM signer

    Usage:
        signer = EVMSigner.from_mnemonic("test test ... junk")
        result = signer.sign_and_send(web3, tx_dict)
    """

    def __init__(self, account: LocalAccount, nonce_manager: Optional[NonceManager] = None):
        self._account = account
        self._nonces = nonce_manager or _nonce_manager

    @property
    def address(self) -> str:
        """Checksummed wallet address"""
        return self._account.address

    def sign_transaction(self, tx_dict: Dict[str, Any]) -> Tuple[bytes, str]:
        """
        Sign a transaction

        Returns:
            (raw_tx_bytes, tx_hash_hex)
        """
        signed = self._account.sign_transaction(tx_dict)
        return signed.raw_transaction, Web3.to_hex(signed.hash)

    def sign_and_send(
        self,
        web3: Web3,
        tx_dict: Dict[str, Any],
        wait_for_receipt: bool = True,
        timeout: int = 120,
    ) -> Dict[str, Any]:
        """
        Sign and send a transaction with thread-safe nonce management.

        Returns:
            Dict with status, tx_hash, and (when waited on) block_number,
            gas_used and the raw receipt
        """
        nonce = None
        nonce_from_manager = False
        tx_hash = None

        try:
            if "nonce" not in tx_dict:
                nonce = self._nonces.get_nonce(web3, self.address)
                tx_dict["nonce"] = nonce
                nonce_from_manager = True
            else:
                nonce = tx_dict["nonce"]

            if "chainId" not in tx_dict:
                tx_dict["chainId"] = web3.eth.chain_id

            signed = self._account.sign_transaction(tx_dict)
            tx_hash = web3.eth.send_raw_transaction(signed.raw_transaction)

            # Broadcast succeeded, the nonce is consumed either way
            if nonce_from_manager:
                self._nonces.confirm_nonce(self.address, nonce)

            if wait_for_receipt:
                receipt = web3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout)
                return _receipt_response(tx_hash, receipt)

            return {
                "status": "pending",
                "tx_hash": Web3.to_hex(tx_hash),
            }

        except Exception as e:
            if tx_hash is not None:
                return _await_broadcast(web3, tx_hash, timeout, e)

            error_str = str(e).lower()
            if nonce_from_manager and any(keyword in error_str for keyword in _PRE_SEND_ERRORS):
                self._nonces.release_nonce(self.address, nonce)

            logger.error(f"Transaction failed: {e}")
            return {
                "status": "failed",
                "error": str(e),
                "tx_hash": None,
            }

    @classmethod
    def from_private_key(cls, private_key: str) -> "EVMSigner":
        """Create signer from a hex private key (with or without 0x prefix)"""
        if not private_key.startswith("0x"):
            private_key = "0x" + private_key
        try:
            account = Account.from_key(private_key)
        except Exception as e:
            raise SignerError.failed(f"invalid private key: {e}") from e
        return cls(account)

    @classmethod
    def from_mnemonic(cls, mnemonic: str, account_path: str = "m/44'/60'/0'/0/0") -> "EVMSigner":
        """Derive a signer from a BIP-39 mnemonic"""
        Account.enable_unaudited_hdwallet_features()
        try:
            account = Account.from_mnemonic(mnemonic, account_path=account_path)
        except Exception as e:
            raise SignerError.failed(f"invalid mnemonic: {e}") from e
        return cls(account)

    def __repr__(self) -> str:
        return f"EVMSigner(address={self.address})"


class NodeSigner:
    """
    Signer backed by an account the node manages (eth_accounts)

    Transactions go through eth_sendTransaction; the node signs and assigns
    the nonce.
    """

    def __init__(self, address: str):
        self._address = Web3.to_checksum_address(address)

    @property
    def address(self) -> str:
        return self._address

    @classmethod
    def from_index(cls, web3: Web3, index: int = 0) -> "NodeSigner":
        """
        Use the node's account at `index`

        Raises:
            SignerError: If the node exposes no account at that index
        """
        accounts = web3.eth.accounts
        if index < 0 or index >= len(accounts):
            raise SignerError(
                f"Node has {len(accounts)} accounts, no account at index {index}"
            )
        return cls(accounts[index])

    def sign_and_send(
        self,
        web3: Web3,
        tx_dict: Dict[str, Any],
        wait_for_receipt: bool = True,
        timeout: int = 120,
    ) -> Dict[str, Any]:
        """Send through the node; same response shape as EVMSigner.sign_and_send"""
        tx_dict.setdefault("from", self._address)
        tx_hash = None
        try:
            tx_hash = web3.eth.send_transaction(tx_dict)

            if wait_for_receipt:
                receipt = web3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout)
                return _receipt_response(tx_hash, receipt)

            return {
                "status": "pending",
                "tx_hash": Web3.to_hex(tx_hash),
            }
        except Exception as e:
            if tx_hash is not None:
                return _await_broadcast(web3, tx_hash, timeout, e)
            logger.error(f"Transaction failed: {e}")
            return {
                "status": "failed",
                "error": str(e),
                "tx_hash": None,
            }

    def __repr__(self) -> str:
        return f"NodeSigner(address={self.address})"


Signer = Union[EVMSigner, NodeSigner]


def create_web3(
    rpc_url: str,
    chain_id: Optional[int] = None,
    timeout: int = 30,
) -> Web3:
    """
    Create Web3 instance for a JSON-RPC endpoint

    Args:
        rpc_url: RPC endpoint URL
        chain_id: Expected chain ID. If given and the node disagrees, a warning is logged.
        timeout: Request timeout in seconds
    """
    provider = HTTPProvider(
        rpc_url,
        request_kwargs={"timeout": timeout},
    )
    web3 = Web3(provider)

    if chain_id is not None:
        try:
            actual = web3.eth.chain_id
            if actual != chain_id:
                logger.warning(f"RPC {rpc_url} reports chain {actual}, expected {chain_id}")
        except Exception as e:
            logger.warning(f"Failed to detect chain ID from RPC: {e}")

    return web3


def create_signer(
    web3: Web3,
    mnemonic: Optional[str] = None,
    account_path: str = "m/44'/60'/0'/0/0",
    signer_index: int = 0,
) -> Signer:
    """
    Create the operating account

    Priority:
    1. mnemonic: derive a local EVMSigner
    2. the node-managed account at signer_index

    Raises:
        SignerError: If neither source yields an account
    """
    if mnemonic:
        return EVMSigner.from_mnemonic(mnemonic, account_path)

    try:
        return NodeSigner.from_index(web3, signer_index)
    except SignerError:
        raise
    except Exception as e:
        logger.error(f"Failed to list node accounts: {e}")
        raise SignerError.not_configured() from e
