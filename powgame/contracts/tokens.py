"""
Token and access-control proxies
"""

from typing import List

from web3 import Web3

from ..types import TxResult
from .abis import ACCESS_CONTROL_ABI, ERC20_ABI, LPSFT_ABI, WRAPPED_NATIVE_ABI
from .base import BaseContract


class AccessControlContract(BaseContract):
    """OpenZeppelin AccessControl surface of any contract"""

    NAME = "AccessControl"
    ABI = ACCESS_CONTROL_ABI

    def has_role(self, role: bytes, account: str) -> bool:
        return bool(self._call("hasRole", role, Web3.to_checksum_address(account)))

    def grant_role(self, role: bytes, account: str) -> TxResult:
        return self._transact(
            "grantRole",
            role,
            Web3.to_checksum_address(account),
            description=f"grantRole({role.rstrip(bytes(1)).decode('utf-8', 'replace')}) on {self.address}",
        )


class ERC20Contract(BaseContract):
    NAME = "ERC20"
    ABI = ERC20_ABI

    def symbol(self) -> str:
        return self._call("symbol")

    def decimals(self) -> int:
        return int(self._call("decimals"))

    def total_supply(self) -> int:
        return int(self._call("totalSupply"))

    def balance_of(self, owner: str) -> int:
        return int(self._call("balanceOf", Web3.to_checksum_address(owner)))

    def allowance(self, owner: str, spender: str) -> int:
        return int(self._call("allowance", Web3.to_checksum_address(owner), Web3.to_checksum_address(spender)))

    def approve(self, spender: str, amount: int) -> TxResult:
        return self._transact(
            "approve",
            Web3.to_checksum_address(spender),
            amount,
            description=f"approve {amount} of {self.address}",
        )


class WrappedNativeContract(ERC20Contract):
    """WETH-style wrapper: deposit() is payable"""

    NAME = "WrappedNative"
    ABI = WRAPPED_NATIVE_ABI

    def deposit(self, amount: int) -> TxResult:
        return self._transact("deposit", value=amount, description=f"wrap {amount} wei")

    def withdraw(self, amount: int) -> TxResult:
        return self._transact("withdraw", amount, description=f"unwrap {amount} wei")


class LpSftContract(BaseContract):
    """LP-SFT (ERC-1155) token ids and metadata"""

    NAME = "LPSFT"
    ABI = LPSFT_ABI

    def get_token_ids(self, owner: str) -> List[int]:
        return [int(token_id) for token_id in self._call("getTokenIds", Web3.to_checksum_address(owner))]

    def uri(self, token_id: int) -> str:
        return self._call("uri", token_id)
