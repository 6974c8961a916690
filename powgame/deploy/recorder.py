"""
Idempotent deployment

ensure_deployed() either reuses an address the resolver already knows or
deploys the contract, records it and fills the address book. A failed
deployment leaves records and books untouched.
"""

import logging
from typing import Any, Optional, Sequence

from ..addresses import AddressResolver, get_contract_name
from ..errors import DeploymentFailed
from ..types import DeploymentRecord
from .artifacts import ArtifactStore
from .deployer import ContractDeployer

logger = logging.getLogger(__name__)


class DeploymentRecorder:
    """
    Deploys each logical contract at most once per network

    Usage:
        recorder = DeploymentRecorder("localhost", resolver, deployer, ArtifactStore())
        address = recorder.ensure_deployed("pow1Token", [deployer_address])
    """

    def __init__(
        self,
        network: str,
        resolver: AddressResolver,
        deployer: ContractDeployer,
        artifacts: Optional[ArtifactStore] = None,
    ):
        self.network = network
        self.resolver = resolver
        self.deployer = deployer
        self.artifacts = artifacts or ArtifactStore()

    def ensure_deployed(
        self,
        logical_name: str,
        ctor_args: Sequence[Any] = (),
        artifact_name: Optional[str] = None,
    ) -> str:
        """
        Address of a logical contract, deploying it if nothing is recorded

        Args:
            logical_name: Address book key, e.g. "pow1LpSftLendFarm"
            ctor_args: Constructor arguments used only when deploying
            artifact_name: Compiled contract to deploy when it differs from the
                deployment name (e.g. LPSFTLendFarm for POW1LpSftLendFarm)

        Raises:
            DeploymentFailed: If the deployment transaction fails
            ArtifactNotFound: If the contract must be deployed but has no artifact
        """
        contract_name = get_contract_name(logical_name) or logical_name

        existing = self.resolver.resolve(self.network, logical_name)
        if existing is not None:
            logger.info(f"Using {contract_name} at {existing}")
            return existing

        artifact = self.artifacts.load(artifact_name or contract_name)
        logger.info(f"Deploying {contract_name} ({artifact.name}) on {self.network}")

        result = self.deployer.deploy(artifact.abi, artifact.bytecode, list(ctor_args))
        if result.is_timeout and result.tx_hash:
            raise DeploymentFailed(
                f"Deployment of {contract_name} was sent as {result.tx_hash} but not confirmed; "
                f"record its address before re-running",
                contract_name=contract_name,
                tx_hash=result.tx_hash,
            )
        if not result.is_success:
            raise DeploymentFailed.reverted(contract_name, result.tx_hash, result.error)
        if not result.contract_address:
            raise DeploymentFailed(
                f"Deployment of {contract_name} returned no contract address",
                contract_name=contract_name,
                tx_hash=result.tx_hash,
            )

        address = result.contract_address
        self.resolver.records.write(
            self.network,
            contract_name,
            DeploymentRecord(address=address, abi=artifact.abi),
        )
        self.resolver.registry.record(self.network, logical_name, address)

        logger.info(f"Deployed {contract_name} to {address} (tx {result.tx_hash})")
        return address

    def record_existing(self, logical_name: str, address: str, abi: Optional[list] = None) -> str:
        """Record a contract created outside this recorder, such as a factory-made pool"""
        contract_name = get_contract_name(logical_name) or logical_name
        self.resolver.records.write(
            self.network,
            contract_name,
            DeploymentRecord(address=address, abi=list(abi or [])),
        )
        self.resolver.registry.record(self.network, logical_name, address)
        logger.info(f"Recorded {contract_name} at {address}")
        return address
