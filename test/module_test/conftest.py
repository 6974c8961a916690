"""
Shared configuration and fixtures for module integration tests.

WARNING: These tests send real transactions to the configured node!

Run against a local hardhat/anvil chain where the game contracts are
deployed (deployment records under DEPLOYMENTS_DIR).

Environment Variables:
    POWGAME_LIVE_TESTS: Set to 1 to enable these tests
    JSON_RPC_URL: RPC endpoint URL (default: http://localhost:8545)
    MNEMONIC: Operator mnemonic (optional, node account 0 otherwise)
"""

import os
import sys
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)


def live_tests_enabled() -> bool:
    return os.getenv("POWGAME_LIVE_TESTS", "").lower() in ("1", "true", "yes")


def skip_if_no_config():
    """Return a skip message unless live tests are enabled and the node answers"""
    if not live_tests_enabled():
        return "POWGAME_LIVE_TESTS is not set"

    from powgame.config import config
    from powgame.infra import create_web3

    web3 = create_web3(config.rpc.url, timeout=config.rpc.timeout_seconds)
    if not web3.is_connected():
        return f"No node at {config.rpc.url}"
    return None


@pytest.fixture(scope="module")
def web3():
    skip_msg = skip_if_no_config()
    if skip_msg:
        pytest.skip(skip_msg)

    from powgame.config import config
    from powgame.infra import create_web3

    return create_web3(config.rpc.url, timeout=config.rpc.timeout_seconds)


@pytest.fixture(scope="module")
def signer(web3):
    from powgame.config import config
    from powgame.infra import create_signer

    return create_signer(
        web3,
        mnemonic=config.signer.mnemonic,
        account_path=config.signer.account_path,
        signer_index=config.signer.signer_index,
    )


@pytest.fixture(scope="module")
def network(web3):
    from powgame.infra import network_name

    return network_name(chain_id=web3.eth.chain_id)


@pytest.fixture(scope="module")
def library(web3, signer, network):
    from powgame.contracts import ContractLibrary
    from powgame.init import build_resolver

    book = build_resolver(network).get_address_book(network)
    return ContractLibrary(web3, signer, book)
