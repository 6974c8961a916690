"""
Base class for web3 contract proxies
"""

import logging
from typing import Any, List, Optional

from web3 import Web3
from web3.exceptions import ContractLogicError

from ..config import config as global_config
from ..errors import SignerError, TransactionReverted
from ..infra.evm_signer import Signer
from ..infra.retry import execute_with_retry, is_recoverable_message, log_with_correlation
from ..types import TxResult

logger = logging.getLogger(__name__)


def revert_reason(error: ContractLogicError) -> str:
    """Revert message of a ContractLogicError, e.g. "execution reverted: AI". """
    message = getattr(error, "message", None)
    if message:
        return str(message)
    return str(error.args[0]) if error.args else str(error)


class BaseContract:
    """
    Thin proxy over a deployed contract

    Reads go straight to eth_call. Writes are built, signed by the configured
    signer, retried on transient RPC failures and confirmed before returning.
    A transaction mined with status 0 raises TransactionReverted.
    """

    NAME = "Contract"
    ABI: List[dict] = []

    def __init__(
        self,
        web3: Web3,
        address: str,
        signer: Optional[Signer] = None,
        receipt_timeout: Optional[int] = None,
    ):
        self._web3 = web3
        self.address = Web3.to_checksum_address(address)
        self._signer = signer
        self._receipt_timeout = (
            receipt_timeout if receipt_timeout is not None else global_config.rpc.receipt_timeout
        )
        self._contract = web3.eth.contract(address=self.address, abi=self.ABI)

    @property
    def web3(self) -> Web3:
        return self._web3

    @property
    def signer(self) -> Optional[Signer]:
        return self._signer

    def _call(self, fn_name: str, *args) -> Any:
        """eth_call a view function"""
        try:
            return getattr(self._contract.functions, fn_name)(*args).call()
        except ContractLogicError as e:
            raise TransactionReverted.reverted(f"{self.NAME}.{fn_name}", reason=revert_reason(e)) from e

    def _transact(
        self,
        fn_name: str,
        *args,
        value: int = 0,
        description: Optional[str] = None,
    ) -> TxResult:
        """
        Submit a state-changing call and wait for its receipt

        Raises:
            SignerError: If the proxy has no signer
            TransactionReverted: If the call reverts during estimation or on chain,
                or is broadcast but never confirmed
        """
        if self._signer is None:
            raise SignerError.not_configured()

        operation = f"{self.NAME}.{fn_name}"
        description = description or operation
        signer = self._signer

        def send() -> TxResult:
            fn = getattr(self._contract.functions, fn_name)(*args)
            try:
                tx = fn.build_transaction({"from": signer.address, "value": value})
            except ContractLogicError as e:
                raise TransactionReverted.reverted(operation, reason=revert_reason(e)) from e

            if "gas" in tx:
                tx["gas"] = int(tx["gas"] * global_config.tx.gas_limit_multiplier)

            response = signer.sign_and_send(
                self._web3, tx, wait_for_receipt=True, timeout=self._receipt_timeout
            )
            result = TxResult.from_receipt(response, description)
            if result.is_failed and result.tx_hash is None:
                result.recoverable = is_recoverable_message(result.error)
            return result

        result = execute_with_retry(send, operation)

        if not result.is_success:
            if result.is_timeout and result.tx_hash:
                raise TransactionReverted.unconfirmed(operation, result.tx_hash, result.error)
            if result.tx_hash:
                raise TransactionReverted.reverted(operation, tx_hash=result.tx_hash, reason=result.error)
            raise TransactionReverted.send_failed(operation, result.error or "unknown error")

        log_with_correlation(logging.INFO, f"Confirmed {result.tx_hash}", operation)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.address})"
