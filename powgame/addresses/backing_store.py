"""
Live deployment backing stores

A backing store answers "where is <ContractName> deployed on this network?"
from a source outside the process, such as a deployment registry service.
"""

import logging
from typing import Optional, Protocol

import httpx

from ..config import config as global_config
from ..errors import RpcError

logger = logging.getLogger(__name__)


class DeploymentStore(Protocol):
    """Anything that can look up a deployed contract by name"""

    def lookup(self, contract_name: str) -> Optional[str]:
        ...


class NullDeploymentStore:
    """Backing store that never knows any deployment"""

    def lookup(self, contract_name: str) -> Optional[str]:
        return None


class HttpDeploymentStore:
    """
    Deployment registry client

    Queries GET {base_url}/{network}/{ContractName} and expects a JSON body
    with an "address" field. A 404 means the contract is not deployed.

    Usage:
        store = HttpDeploymentStore("https://registry.example.org", "base")
        address = store.lookup("DutchAuction")
    """

    def __init__(
        self,
        base_url: str,
        network: str,
        timeout: float = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._network = network
        self._timeout = timeout if timeout is not None else global_config.deployment.registry_timeout
        self._client: Optional[httpx.Client] = None

    @property
    def network(self) -> str:
        return self._network

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client"""
        if self._client is None:
            self._client = httpx.Client(timeout=self._timeout)
        return self._client

    def lookup(self, contract_name: str) -> Optional[str]:
        """
        Look up a deployment

        Returns:
            Address, or None if the registry has no such deployment

        Raises:
            RpcError: If the registry cannot be reached or answers malformed data
        """
        url = f"{self._base_url}/{self._network}/{contract_name}"
        client = self._get_client()

        try:
            response = client.get(url)
        except httpx.TimeoutException as e:
            raise RpcError.timeout(url, self._timeout) from e
        except httpx.HTTPError as e:
            raise RpcError.connection_failed(url, e) from e

        if response.status_code == 404:
            logger.debug(f"Registry has no {contract_name} on {self._network}")
            return None

        try:
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise RpcError.invalid_response(url, f"HTTP {e.response.status_code}") from e
        except ValueError as e:
            raise RpcError.invalid_response(url, f"invalid JSON: {e}") from e

        address = data.get("address") if isinstance(data, dict) else None
        if not address:
            return None
        return address

    def close(self):
        """Close HTTP client"""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
