"""
Deployment record files

One JSON file per (network, contract): deployments/<network>/<ContractName>.json
holding {"address": ..., "abi": [...]}. Records are written once and never
rewritten.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Union

from ..errors import PreconditionViolation
from ..types import DeploymentRecord

logger = logging.getLogger(__name__)


class DeploymentRecordStore:
    """Reads and writes deployment records under a root directory"""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def path(self, network: str, contract_name: str) -> Path:
        return self.root / network / f"{contract_name}.json"

    def load(self, network: str, contract_name: str) -> Optional[DeploymentRecord]:
        """
        Load a record

        Missing, unreadable or address-less files all read as "no record".
        """
        path = self.path(network, contract_name)
        if not path.is_file():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return DeploymentRecord.from_json(data)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable deployment record {path}: {e}")
            return None

    def write(self, network: str, contract_name: str, record: DeploymentRecord) -> Path:
        """
        Persist a new record

        Raises:
            PreconditionViolation: If a record for a different address already exists
        """
        path = self.path(network, contract_name)
        existing = self.load(network, contract_name)
        if existing is not None:
            if existing.address.lower() == record.address.lower():
                return path
            raise PreconditionViolation(
                f"{path} already records {existing.address}, not {record.address}",
                details={
                    "network": network,
                    "contract_name": contract_name,
                    "recorded": existing.address,
                    "attempted": record.address,
                },
            )

        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(".json.tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(record.to_json(), f, indent=2)
        tmp_path.replace(path)
        return path
