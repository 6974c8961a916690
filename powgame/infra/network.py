"""
Network name normalization

Deployment records and static registries are keyed by network name. Local
development chains all share the name "localhost".
"""

from typing import Optional

LOCAL_NETWORK = "localhost"

LOCAL_CHAIN_IDS = (1337, 31337)
LOCAL_NETWORK_ALIASES = ("hardhat", "localhost", "anvil", "ganache")

CHAIN_NAMES = {
    1: "mainnet",
    10: "optimism",
    137: "polygon",
    8453: "base",
    42161: "arbitrum",
    11155111: "sepolia",
}


def network_name(chain_id: Optional[int] = None, name: Optional[str] = None) -> str:
    """
    Normalize a chain to its deployment network name

    Args:
        chain_id: Chain ID reported by the node
        name: Configured network name, if any (takes priority unless it is a local alias)

    Raises:
        ValueError: If neither argument is given
    """
    if name:
        lowered = name.lower()
        if lowered in LOCAL_NETWORK_ALIASES:
            return LOCAL_NETWORK
        return lowered

    if chain_id is None:
        raise ValueError("network_name needs a chain_id or a name")

    if chain_id in LOCAL_CHAIN_IDS:
        return LOCAL_NETWORK
    return CHAIN_NAMES.get(chain_id, f"chain-{chain_id}")
