"""
Layered address resolution

Lookup order, first hit wins:
1. In-memory AddressBook of the registry
2. Static per-network registry (powgame/addresses/<network>.json)
3. Deployment record file (deployments/<network>/<ContractName>.json)
4. Live deployment backing store

Hits from sources 2-4 are written back into the in-memory book, so later
lookups of the same key never leave the process. A miss everywhere is not
an error: the caller gets None and treats it as "not deployed yet".
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional

from ..config import config as global_config
from ..types import AddressSource, Registry, ResolvedAddress
from .backing_store import DeploymentStore, NullDeploymentStore
from .contract_names import get_contract_name, list_logical_names
from .records import DeploymentRecordStore

logger = logging.getLogger(__name__)

_STATIC_DIR = Path(__file__).parent
_NO_BACKING_STORE = NullDeploymentStore()


def load_static_book(network: str) -> Dict[str, str]:
    """
    Load the static registry for a network

    Returns an empty dict for networks without a registry file.
    """
    path = _STATIC_DIR / f"{network}.json"
    if not path.is_file():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return {name: address for name, address in data.items() if address}


class AddressResolver:
    """
    Resolves logical contract names to deployed addresses

    Usage:
        resolver = AddressResolver(Registry(), DeploymentRecordStore("deployments"))
        address = resolver.resolve("localhost", "dutchAuction")
        if address is None:
            ...  # deploy it
    """

    def __init__(
        self,
        registry: Registry,
        records: Optional[DeploymentRecordStore] = None,
        backing_stores: Optional[Dict[str, DeploymentStore]] = None,
        static_books: Optional[Dict[str, Dict[str, str]]] = None,
    ):
        """
        Args:
            registry: Address books shared with the deployment recorder
            records: Deployment record files (defaults to config DEPLOYMENTS_DIR)
            backing_stores: Live backing store per network name; other networks
                use a NullDeploymentStore
            static_books: Static registries per network (defaults to the bundled JSON)
        """
        self.registry = registry
        self.records = records or DeploymentRecordStore(global_config.deployment.deployments_dir)
        self._backing_stores: Dict[str, DeploymentStore] = dict(backing_stores or {})
        self._static_books = static_books
        self._static_cache: Dict[str, Dict[str, str]] = {}

    def register_backing_store(self, network: str, store: DeploymentStore) -> None:
        self._backing_stores[network] = store

    def _static_book(self, network: str) -> Dict[str, str]:
        if self._static_books is not None:
            return self._static_books.get(network, {})
        if network not in self._static_cache:
            self._static_cache[network] = load_static_book(network)
        return self._static_cache[network]

    def resolve_with_source(self, network: str, logical_name: str) -> ResolvedAddress:
        """Resolve and report which source answered"""
        address = self.registry.lookup(network, logical_name)
        if address is not None:
            return ResolvedAddress(address, AddressSource.BOOK)

        address = self._static_book(network).get(logical_name)
        if address:
            return self._remember(network, logical_name, address, AddressSource.STATIC)

        contract_name = get_contract_name(logical_name)
        if contract_name is None:
            logger.debug(f"No deployment name for '{logical_name}', skipping records and backing store")
            return ResolvedAddress.not_found()

        record = self.records.load(network, contract_name)
        if record is not None:
            return self._remember(network, logical_name, record.address, AddressSource.RECORD)

        address = self._backing_stores.get(network, _NO_BACKING_STORE).lookup(contract_name)
        if address:
            return self._remember(network, logical_name, address, AddressSource.BACKING_STORE)

        return ResolvedAddress.not_found()

    def resolve(self, network: str, logical_name: str) -> Optional[str]:
        """Address of a logical contract, or None if it is not deployed"""
        return self.resolve_with_source(network, logical_name).address

    def get_address_book(self, network: str) -> Dict[str, Optional[str]]:
        """Resolve every known logical name for a network"""
        return {name: self.resolve(network, name) for name in list_logical_names()}

    def _remember(
        self,
        network: str,
        logical_name: str,
        address: str,
        source: AddressSource,
    ) -> ResolvedAddress:
        self.registry.record(network, logical_name, address)
        logger.debug(f"Resolved {logical_name} on {network} from {source.value}: {address}")
        return ResolvedAddress(address, source)
