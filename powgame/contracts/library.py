"""
Contract library: proxies by logical address-book name
"""

from typing import Dict, Mapping, Optional

from web3 import Web3

from ..errors import PreconditionViolation
from ..infra.evm_signer import Signer
from .dutch_auction import DutchAuctionContract
from .pool import UniswapV3PoolContract
from .tokens import AccessControlContract, ERC20Contract, LpSftContract, WrappedNativeContract


class ContractLibrary:
    """
    Builds contract proxies from a resolved address book

    Usage:
        library = ContractLibrary(web3, signer, resolver.get_address_book(network))
        auction = library.dutch_auction()
        pool = library.pool("pow1Pool")
    """

    def __init__(self, web3: Web3, signer: Optional[Signer], book: Mapping[str, Optional[str]]):
        self._web3 = web3
        self._signer = signer
        self._book = book
        self._cache: Dict[tuple, object] = {}

    def address(self, name: str) -> str:
        """
        Address of a logical contract

        Raises:
            PreconditionViolation: If the book has no address for it
        """
        address = self._book.get(name)
        if not address:
            raise PreconditionViolation.missing_address(name)
        return address

    def _proxy(self, cls, name: str):
        key = (cls, name)
        if key not in self._cache:
            self._cache[key] = cls(self._web3, self.address(name), self._signer)
        return self._cache[key]

    def access_control(self, name: str) -> AccessControlContract:
        return self._proxy(AccessControlContract, name)

    def erc20(self, name: str) -> ERC20Contract:
        return self._proxy(ERC20Contract, name)

    def wrapped_native(self, name: str = "wrappedNativeToken") -> WrappedNativeContract:
        return self._proxy(WrappedNativeContract, name)

    def pool(self, name: str) -> UniswapV3PoolContract:
        return self._proxy(UniswapV3PoolContract, name)

    def lp_sft(self, name: str = "lpSft") -> LpSftContract:
        return self._proxy(LpSftContract, name)

    def dutch_auction(self, name: str = "dutchAuction") -> DutchAuctionContract:
        return self._proxy(DutchAuctionContract, name)
