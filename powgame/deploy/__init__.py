"""
Idempotent contract deployment
"""

from .artifacts import ArtifactStore, ContractArtifact, artifact_abi, artifact_bytecode
from .deployer import ContractDeployer, Web3ContractDeployer
from .recorder import DeploymentRecorder
from .plan import DEPLOYER, DeployStep, DeploymentPlan, ReadStep, Ref, default_plan
from .provisioner import Provisioner, web3_address_reader

__all__ = [
    "ArtifactStore",
    "ContractArtifact",
    "artifact_abi",
    "artifact_bytecode",
    "ContractDeployer",
    "Web3ContractDeployer",
    "DeploymentRecorder",
    "DEPLOYER",
    "DeployStep",
    "DeploymentPlan",
    "ReadStep",
    "Ref",
    "default_plan",
    "Provisioner",
    "web3_address_reader",
]
