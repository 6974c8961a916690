"""
Contract deployers
"""

import logging
from typing import Any, List, Optional, Protocol, Sequence

from web3 import Web3
from web3.exceptions import ContractLogicError

from ..config import config as global_config
from ..contracts.base import revert_reason
from ..errors import SignerError
from ..infra.evm_signer import Signer
from ..infra.retry import execute_with_retry, is_recoverable_message
from ..types import TxResult

logger = logging.getLogger(__name__)


class ContractDeployer(Protocol):
    """Sends a creation transaction and reports the outcome"""

    def deploy(self, abi: List[dict], bytecode: str, ctor_args: Sequence[Any] = ()) -> TxResult:
        """
        Returns:
            TxResult whose contract_address is set on success
        """
        ...


class Web3ContractDeployer:
    """
    Deploys through web3.py with the operating signer

    Failures come back as a failed TxResult; deciding what a failed
    deployment means is left to the caller.
    """

    def __init__(self, web3: Web3, signer: Optional[Signer], receipt_timeout: Optional[int] = None):
        if signer is None:
            raise SignerError.not_configured()
        self._web3 = web3
        self._signer = signer
        self._receipt_timeout = (
            receipt_timeout if receipt_timeout is not None else global_config.rpc.receipt_timeout
        )

    @property
    def address(self) -> str:
        return self._signer.address

    def deploy(self, abi: List[dict], bytecode: str, ctor_args: Sequence[Any] = ()) -> TxResult:
        factory = self._web3.eth.contract(abi=abi, bytecode=bytecode)
        signer = self._signer

        def send() -> TxResult:
            try:
                tx = factory.constructor(*list(ctor_args)).build_transaction(
                    {"from": signer.address, "value": 0}
                )
            except ContractLogicError as e:
                return TxResult.failed(f"constructor reverted: {revert_reason(e)}")

            if "gas" in tx:
                tx["gas"] = int(tx["gas"] * global_config.tx.gas_limit_multiplier)

            response = signer.sign_and_send(
                self._web3, tx, wait_for_receipt=True, timeout=self._receipt_timeout
            )
            result = TxResult.from_receipt(response, "deploy")
            if result.is_failed and result.tx_hash is None:
                result.recoverable = is_recoverable_message(result.error)
            return result

        return execute_with_retry(send, "deploy")
