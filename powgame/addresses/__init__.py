"""
Address resolution: static registries, deployment records and backing stores
"""

from .contract_names import CONTRACT_NAMES, get_contract_name, list_logical_names
from .backing_store import DeploymentStore, HttpDeploymentStore, NullDeploymentStore
from .records import DeploymentRecordStore
from .resolver import AddressResolver, load_static_book

__all__ = [
    "CONTRACT_NAMES",
    "get_contract_name",
    "list_logical_names",
    "DeploymentStore",
    "HttpDeploymentStore",
    "NullDeploymentStore",
    "DeploymentRecordStore",
    "AddressResolver",
    "load_static_book",
]
