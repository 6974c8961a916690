"""
Runs a deployment plan against a network

Usage:
    powgame-deploy
    python -m powgame.deploy.provisioner
"""

import logging
import sys
from typing import Any, Callable, Dict, List, Optional

from web3 import Web3

from ..addresses import AddressResolver, DeploymentRecordStore, HttpDeploymentStore
from ..config import config as global_config, setup_logging
from ..errors import PowGameError, PreconditionViolation
from ..infra.evm_signer import create_signer, create_web3
from ..infra.network import network_name
from ..types import Registry
from .artifacts import ArtifactStore
from .deployer import Web3ContractDeployer
from .plan import DEPLOYER, DeploymentPlan, ReadStep, Ref, default_plan
from .recorder import DeploymentRecorder

logger = logging.getLogger(__name__)

# (contract address, view function name) -> address it returns
AddressReader = Callable[[str, str], str]


def web3_address_reader(web3: Web3) -> AddressReader:
    """Reader that eth_calls a no-argument view returning an address"""

    def read(address: str, function: str) -> str:
        abi = [
            {
                "type": "function",
                "name": function,
                "stateMutability": "view",
                "inputs": [],
                "outputs": [{"name": "", "type": "address"}],
            }
        ]
        contract = web3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)
        return getattr(contract.functions, function)().call()

    return read


class Provisioner:
    """
    Applies a DeploymentPlan through a DeploymentRecorder

    Every step is idempotent: a contract the resolver already knows is
    reused, so re-running a plan after a partial failure resumes where it
    stopped.
    """

    def __init__(
        self,
        recorder: DeploymentRecorder,
        deployer_address: str,
        reader: Optional[AddressReader] = None,
    ):
        self.recorder = recorder
        self.deployer_address = deployer_address
        self.reader = reader

    @property
    def network(self) -> str:
        return self.recorder.network

    def _lookup(self, name: str, step_name: str) -> str:
        address = self.recorder.resolver.resolve(self.network, name)
        if address is None:
            raise PreconditionViolation(
                f"{step_name} needs '{name}', which is not deployed on {self.network}",
                details={"step": step_name, "missing": name},
            )
        return address

    def _arg(self, value: Any, step_name: str) -> Any:
        if value is DEPLOYER:
            return self.deployer_address
        if isinstance(value, Ref):
            return self._lookup(value.name, step_name)
        return value

    def _read(self, step: ReadStep) -> str:
        existing = self.recorder.resolver.resolve(self.network, step.logical_name)
        if existing is not None:
            logger.info(f"Using {step.logical_name} at {existing}")
            return existing
        if self.reader is None:
            raise PreconditionViolation(
                f"No address reader configured to read {step.logical_name} from {step.source}"
            )
        source = self._lookup(step.source, step.logical_name)
        address = self.reader(source, step.function)
        return self.recorder.record_existing(step.logical_name, address, step.abi)

    def run(self, plan: DeploymentPlan) -> Dict[str, str]:
        """
        Apply every step in order

        Returns:
            Logical name -> address for every step of the plan

        Raises:
            PreconditionViolation: If a step references an unknown address
            DeploymentFailed: If a deployment transaction fails
        """
        addresses: Dict[str, str] = {}
        for step in plan:
            if isinstance(step, ReadStep):
                addresses[step.logical_name] = self._read(step)
                continue

            args: List[Any] = [self._arg(arg, step.logical_name) for arg in step.args]
            addresses[step.logical_name] = self.recorder.ensure_deployed(
                step.logical_name, args, artifact_name=step.artifact
            )
        logger.info(f"Provisioned {len(addresses)} contracts on {self.network}")
        return addresses


def main() -> int:
    setup_logging()

    web3 = create_web3(global_config.rpc.url, timeout=global_config.rpc.timeout_seconds)
    signer = create_signer(
        web3,
        mnemonic=global_config.signer.mnemonic,
        account_path=global_config.signer.account_path,
        signer_index=global_config.signer.signer_index,
    )
    network = network_name(chain_id=web3.eth.chain_id)
    logger.info(f"Deploying to {network} as {signer.address}")

    backing_stores = {}
    if global_config.deployment.registry_url:
        backing_stores[network] = HttpDeploymentStore(
            global_config.deployment.registry_url,
            network,
            timeout=global_config.deployment.registry_timeout,
        )

    resolver = AddressResolver(
        Registry(),
        DeploymentRecordStore(global_config.deployment.deployments_dir),
        backing_stores=backing_stores,
    )
    recorder = DeploymentRecorder(
        network,
        resolver,
        Web3ContractDeployer(web3, signer),
        ArtifactStore(global_config.deployment.artifacts_dir),
    )
    provisioner = Provisioner(recorder, signer.address, web3_address_reader(web3))
    provisioner.run(default_plan())
    return 0


def run() -> None:
    try:
        sys.exit(main())
    except PowGameError as e:
        logger.error(f"Deployment failed: {e}")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Deployment failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    run()
