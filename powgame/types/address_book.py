"""
Address book, registry and deployment record types
"""

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple


class AddressSource(Enum):
    """Where a resolved address came from"""
    BOOK = "book"
    STATIC = "static"
    RECORD = "record"
    BACKING_STORE = "backing_store"
    DEPLOYED = "deployed"


@dataclass(frozen=True)
class ResolvedAddress:
    """
    Outcome of an address lookup

    A lookup that finds nothing is not an error: `address` is None and
    `found` is False, which callers read as "not deployed yet".
    """
    address: Optional[str] = None
    source: Optional[AddressSource] = None

    @property
    def found(self) -> bool:
        return self.address is not None

    @classmethod
    def not_found(cls) -> "ResolvedAddress":
        return cls()


def _same_address(a: str, b: str) -> bool:
    return a.lower() == b.lower()


class AddressBook:
    """
    Per-network mapping of logical contract name to address

    Entries are fill-once: a key that holds an address can be set again with
    the same address (no-op) but never cleared or pointed somewhere else.
    """

    def __init__(self, network: str, entries: Optional[Dict[str, str]] = None):
        self.network = network
        self._entries: Dict[str, str] = {}
        for name, address in (entries or {}).items():
            self.set(name, address)

    def get(self, name: str) -> Optional[str]:
        return self._entries.get(name)

    def set(self, name: str, address: str) -> bool:
        """
        Fill a key

        Returns:
            True if the key was newly filled, False if it already held the same address

        Raises:
            ValueError: If the key already holds a different address
        """
        if not address:
            raise ValueError(f"Empty address for '{name}'")
        current = self._entries.get(name)
        if current is not None:
            if _same_address(current, address):
                return False
            raise ValueError(
                f"{self.network}: '{name}' is already {current}, refusing to overwrite with {address}"
            )
        self._entries[name] = address
        return True

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def items(self) -> List[Tuple[str, str]]:
        return list(self._entries.items())

    def to_dict(self) -> Dict[str, str]:
        return dict(self._entries)

    def __repr__(self) -> str:
        return f"AddressBook({self.network}, {len(self._entries)} entries)"


class Registry:
    """
    Address books for every network the process touches

    Passed explicitly to resolvers and recorders. All mutation goes through
    `record()`, which holds a single lock so threaded callers see one writer.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._books: Dict[str, AddressBook] = {}

    def book(self, network: str) -> AddressBook:
        """Get (or create empty) the book for a network"""
        with self._lock:
            if network not in self._books:
                self._books[network] = AddressBook(network)
            return self._books[network]

    def lookup(self, network: str, name: str) -> Optional[str]:
        with self._lock:
            book = self._books.get(network)
            return book.get(name) if book is not None else None

    def record(self, network: str, name: str, address: str) -> bool:
        """Fill a key in a network's book under the registry lock"""
        with self._lock:
            if network not in self._books:
                self._books[network] = AddressBook(network)
            return self._books[network].set(name, address)

    def networks(self) -> List[str]:
        with self._lock:
            return list(self._books)


@dataclass
class DeploymentRecord:
    """
    Persisted result of a contract deployment

    Serialized as deployments/<network>/<ContractName>.json with keys
    "address" and "abi".
    """
    address: str
    abi: List[dict] = field(default_factory=list)

    def to_json(self) -> dict:
        return {"address": self.address, "abi": self.abi}

    @classmethod
    def from_json(cls, data: dict) -> "DeploymentRecord":
        if not isinstance(data, dict) or not data.get("address"):
            raise ValueError("Deployment record has no address")
        return cls(address=data["address"], abi=data.get("abi") or [])
