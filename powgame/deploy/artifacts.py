"""
Compiled contract artifacts

Supports the two layouts the contracts are built with:
- Hardhat: artifacts/**/<Name>.sol/<Name>.json
- Foundry: out/<Name>.sol/<Name>.json

Bytecode may be a plain hex string or {"object": "0x..."}.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..config import config as global_config
from ..errors import ArtifactNotFound

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContractArtifact:
    """ABI and creation bytecode of one contract"""
    name: str
    abi: List[dict]
    bytecode: str


def artifact_abi(artifact: Dict[str, Any]) -> List[dict]:
    abi = artifact.get("abi")
    if not isinstance(abi, list) or not abi:
        raise ValueError("Invalid or missing ABI in artifact")
    return abi


def artifact_bytecode(artifact: Dict[str, Any]) -> str:
    """Extract deployable bytecode from either artifact shape"""
    bytecode = artifact.get("bytecode")
    if isinstance(bytecode, dict):
        bytecode = bytecode.get("object")
    if not isinstance(bytecode, str):
        raise ValueError("Invalid or missing bytecode in artifact")
    if not bytecode.startswith("0x"):
        bytecode = "0x" + bytecode
    if len(bytecode) < 10:
        raise ValueError("Artifact bytecode is empty (abstract contract or interface?)")
    return bytecode


class ArtifactStore:
    """
    Finds and caches compiled artifacts under a root directory

    Usage:
        store = ArtifactStore("artifacts")
        artifact = store.load("DutchAuction")
    """

    def __init__(self, root: Optional[Union[str, Path]] = None):
        self.root = Path(root if root is not None else global_config.deployment.artifacts_dir)
        self._cache: Dict[str, ContractArtifact] = {}

    def find(self, contract_name: str) -> Optional[Path]:
        """Path of a contract's artifact file, or None"""
        file_name = f"{contract_name}.json"
        for candidate in (
            self.root / f"{contract_name}.sol" / file_name,
            self.root / "out" / f"{contract_name}.sol" / file_name,
        ):
            if candidate.is_file():
                return candidate

        if not self.root.is_dir():
            return None
        for path in sorted(self.root.rglob(file_name)):
            # Hardhat writes <Name>.dbg.json next to the artifact, and build-info
            # holds unrelated files with the same name
            if path.parent.name == f"{contract_name}.sol" and "build-info" not in path.parts:
                return path
        return None

    def load(self, contract_name: str) -> ContractArtifact:
        """
        Load a contract's artifact

        Raises:
            ArtifactNotFound: If no artifact exists or it cannot be parsed
        """
        if contract_name in self._cache:
            return self._cache[contract_name]

        path = self.find(contract_name)
        if path is None:
            raise ArtifactNotFound.missing(contract_name, str(self.root))

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            artifact = ContractArtifact(
                name=contract_name,
                abi=artifact_abi(data),
                bytecode=artifact_bytecode(data),
            )
        except (OSError, ValueError, AttributeError) as e:
            raise ArtifactNotFound(
                f"Unusable artifact for {contract_name} at {path}: {e}",
                contract_name=contract_name,
            ) from e

        logger.debug(f"Loaded artifact {contract_name} from {path}")
        self._cache[contract_name] = artifact
        return artifact
