"""
Test Deployment

Tests for artifact discovery, idempotent deployment and plan execution
against an in-memory deployer.
"""

import json
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from powgame.addresses import AddressResolver, DeploymentRecordStore, get_contract_name
from powgame.deploy import (
    DEPLOYER,
    ArtifactStore,
    DeploymentPlan,
    DeploymentRecorder,
    DeployStep,
    Provisioner,
    ReadStep,
    Ref,
    Web3ContractDeployer,
    artifact_bytecode,
    default_plan,
)
from powgame.errors import ArtifactNotFound, DeploymentFailed, PreconditionViolation
from powgame.infra import EVMSigner, NonceManager
from powgame.types import Registry, TxResult

from fakes import addr

ABI = [{"type": "constructor", "inputs": []}]
DEPLOYER_ADDRESS = addr(0xD3)
# Hardhat/anvil default account 0 - public test key
OPERATOR_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"

EXTERNAL = {
    "uniswapV3Factory": addr(0xF1),
    "uniswapV3NftManager": addr(0xF2),
    "uniswapV3Staker": addr(0xF3),
    "wrappedNativeToken": addr(0xF4),
    "usdcToken": addr(0xF5),
}


class FakeDeployer:
    """Assigns sequential addresses to every deployment"""

    def __init__(self, fail_on=None):
        self.fail_on = fail_on
        self.deployments = []

    def deploy(self, abi, bytecode, ctor_args=()):
        self.deployments.append((bytecode, list(ctor_args)))
        if bytecode == self.fail_on:
            return TxResult.failed("execution reverted", tx_hash="0xbad")
        return TxResult.success(
            f"0x{len(self.deployments):064x}",
            contract_address=addr(0x1000 + len(self.deployments)),
        )


def write_artifact(root: Path, name: str, bytecode=None, foundry=False):
    directory = root / "out" / f"{name}.sol" if foundry else root / "contracts" / "src" / f"{name}.sol"
    directory.mkdir(parents=True, exist_ok=True)
    if bytecode is None:
        bytecode = "0x60806040" + name.encode().hex()
    (directory / f"{name}.json").write_text(json.dumps({"abi": ABI, "bytecode": bytecode}))
    return bytecode


def make_recorder(tmp_path, deployer, static=None):
    resolver = AddressResolver(
        Registry(),
        DeploymentRecordStore(tmp_path / "deployments"),
        static_books={"localhost": dict(static or {})},
    )
    return DeploymentRecorder("localhost", resolver, deployer, ArtifactStore(tmp_path / "artifacts"))


def test_artifact_bytecode_shapes():
    print("Testing artifact bytecode shapes...")

    assert artifact_bytecode({"bytecode": "0x6080604052"}) == "0x6080604052"
    assert artifact_bytecode({"bytecode": {"object": "6080604052"}}) == "0x6080604052"
    with pytest.raises(ValueError):
        artifact_bytecode({"bytecode": "0x"})
    with pytest.raises(ValueError):
        artifact_bytecode({})

    print("  Bytecode shapes: PASSED")


def test_artifact_store_layouts(tmp_path):
    print("Testing artifact layouts...")

    root = tmp_path / "artifacts"
    hardhat = write_artifact(root, "DutchAuction")
    foundry = write_artifact(root, "POW1", bytecode={"object": "608060405234801561001057600080fd"}, foundry=True)
    (root / "build-info").mkdir()
    (root / "build-info" / "LPSFT.json").write_text("{}")

    store = ArtifactStore(root)
    assert store.load("DutchAuction").bytecode == hardhat
    assert store.load("POW1").bytecode == "0x" + foundry["object"]
    assert store.load("POW1") is store.load("POW1")

    with pytest.raises(ArtifactNotFound):
        store.load("LPSFT")

    print("  Artifact layouts: PASSED")


def test_recorder_deploys_once(tmp_path):
    print("Testing ensure_deployed idempotence...")

    write_artifact(tmp_path / "artifacts", "POW1")
    deployer = FakeDeployer()
    recorder = make_recorder(tmp_path, deployer)

    first = recorder.ensure_deployed("pow1Token", [DEPLOYER_ADDRESS])
    second = recorder.ensure_deployed("pow1Token", [DEPLOYER_ADDRESS])

    assert first == second
    assert len(deployer.deployments) == 1
    assert deployer.deployments[0][1] == [DEPLOYER_ADDRESS]

    record = json.loads((tmp_path / "deployments" / "localhost" / "POW1.json").read_text())
    assert record == {"address": first, "abi": ABI}

    # A fresh process finds the record on disk
    fresh = make_recorder(tmp_path, FakeDeployer())
    assert fresh.ensure_deployed("pow1Token", [DEPLOYER_ADDRESS]) == first
    assert fresh.deployer.deployments == []

    print("  ensure_deployed: PASSED")


def test_recorder_uses_static_address(tmp_path):
    deployer = FakeDeployer()
    recorder = make_recorder(tmp_path, deployer, static={"wrappedNativeToken": EXTERNAL["wrappedNativeToken"]})

    assert recorder.ensure_deployed("wrappedNativeToken") == EXTERNAL["wrappedNativeToken"]
    assert deployer.deployments == []


def test_recorder_failure_writes_nothing(tmp_path):
    bytecode = write_artifact(tmp_path / "artifacts", "POW1")
    recorder = make_recorder(tmp_path, FakeDeployer(fail_on=bytecode))

    with pytest.raises(DeploymentFailed) as exc_info:
        recorder.ensure_deployed("pow1Token", [DEPLOYER_ADDRESS])

    assert exc_info.value.contract_name == "POW1"
    assert exc_info.value.tx_hash == "0xbad"
    assert not (tmp_path / "deployments" / "localhost" / "POW1.json").exists()
    assert recorder.resolver.registry.lookup("localhost", "pow1Token") is None


@patch("powgame.infra.evm_signer.time.sleep")
@patch("powgame.infra.retry.time.sleep")
def test_unconfirmed_deployment_is_not_resent(mock_retry_sleep, mock_signer_sleep, tmp_path):
    print("Testing deployment whose receipt never arrives...")

    write_artifact(tmp_path / "artifacts", "POW1")
    web3 = MagicMock()
    web3.eth.get_transaction_count.return_value = 0
    web3.eth.chain_id = 31337
    web3.eth.send_raw_transaction.return_value = bytes.fromhex("ab" * 32)
    web3.eth.wait_for_transaction_receipt.side_effect = ConnectionError("connection reset by peer")
    web3.eth.contract.return_value.constructor.return_value.build_transaction.return_value = {
        "gas": 1_000_000,
        "gasPrice": 10**9,
        "value": 0,
        "data": "0x6080",
    }
    signer = EVMSigner.from_private_key(OPERATOR_KEY)
    signer._nonces = NonceManager()
    recorder = make_recorder(tmp_path, Web3ContractDeployer(web3, signer))

    with pytest.raises(DeploymentFailed) as exc_info:
        recorder.ensure_deployed("pow1Token", [DEPLOYER_ADDRESS])

    assert exc_info.value.tx_hash == "0x" + "ab" * 32
    assert "not confirmed" in str(exc_info.value)
    web3.eth.send_raw_transaction.assert_called_once()
    assert not (tmp_path / "deployments" / "localhost" / "POW1.json").exists()

    print("  Unconfirmed deployment: PASSED")


def test_recorder_shared_artifact(tmp_path):
    write_artifact(tmp_path / "artifacts", "LPSFTLendFarm")
    recorder = make_recorder(tmp_path, FakeDeployer())

    pow1_farm = recorder.ensure_deployed("pow1LpSftLendFarm", [], artifact_name="LPSFTLendFarm")
    pow5_farm = recorder.ensure_deployed("pow5LpSftLendFarm", [], artifact_name="LPSFTLendFarm")

    assert pow1_farm != pow5_farm
    assert (tmp_path / "deployments" / "localhost" / "POW1LpSftLendFarm.json").is_file()
    assert (tmp_path / "deployments" / "localhost" / "POW5LpSftLendFarm.json").is_file()


def test_provisioner_resolves_refs(tmp_path):
    print("Testing Provisioner refs...")

    write_artifact(tmp_path / "artifacts", "POW1")
    write_artifact(tmp_path / "artifacts", "NOLPSFT")
    plan = DeploymentPlan([
        DeployStep("pow1Token", (DEPLOYER,)),
        DeployStep("noLpSft", (DEPLOYER, Ref("pow1Token"), 7)),
    ])
    deployer = FakeDeployer()
    provisioner = Provisioner(make_recorder(tmp_path, deployer), DEPLOYER_ADDRESS)

    addresses = provisioner.run(plan)

    assert list(addresses) == ["pow1Token", "noLpSft"]
    assert deployer.deployments[1][1] == [DEPLOYER_ADDRESS, addresses["pow1Token"], 7]

    print("  Provisioner refs: PASSED")


def test_provisioner_missing_ref(tmp_path):
    write_artifact(tmp_path / "artifacts", "NOLPSFT")
    plan = DeploymentPlan([DeployStep("noLpSft", (DEPLOYER, Ref("lpSft")))])
    deployer = FakeDeployer()

    with pytest.raises(PreconditionViolation) as exc_info:
        Provisioner(make_recorder(tmp_path, deployer), DEPLOYER_ADDRESS).run(plan)

    assert exc_info.value.details == {"step": "noLpSft", "missing": "lpSft"}
    assert deployer.deployments == []


def test_provisioner_read_step(tmp_path):
    write_artifact(tmp_path / "artifacts", "UniV3PoolFactory")
    pool_address = addr(0x9001)
    reads = []

    def reader(address, function):
        reads.append((address, function))
        return pool_address

    plan = DeploymentPlan([
        DeployStep("pow1PoolFactory", (), artifact="UniV3PoolFactory"),
        ReadStep("pow1Pool", "pow1PoolFactory", "uniswapV3Pool"),
    ])
    recorder = make_recorder(tmp_path, FakeDeployer())

    addresses = Provisioner(recorder, DEPLOYER_ADDRESS, reader).run(plan)
    Provisioner(recorder, DEPLOYER_ADDRESS, reader).run(plan)

    assert addresses["pow1Pool"] == pool_address
    assert reads == [(addresses["pow1PoolFactory"], "uniswapV3Pool")]
    assert (tmp_path / "deployments" / "localhost" / "POW1Pool.json").is_file()


def test_default_plan_runs_end_to_end(tmp_path):
    print("Testing default plan...")

    plan = default_plan()
    for step in plan:
        if isinstance(step, DeployStep):
            write_artifact(tmp_path / "artifacts", step.artifact or get_contract_name(step.logical_name))

    deployer = FakeDeployer()
    recorder = make_recorder(tmp_path, deployer, static=EXTERNAL)
    pools = iter([addr(0x9001), addr(0x9005)])

    addresses = Provisioner(recorder, DEPLOYER_ADDRESS, lambda address, function: next(pools)).run(plan)

    assert addresses["pow1Pool"] == addr(0x9001)
    assert addresses["pow5Pool"] == addr(0x9005)
    assert len(deployer.deployments) == len([s for s in plan if isinstance(s, DeployStep)])
    assert len(set(addresses.values())) == len(addresses)

    # Second run deploys nothing
    Provisioner(recorder, DEPLOYER_ADDRESS).run(plan)
    assert len(deployer.deployments) == len([s for s in plan if isinstance(s, DeployStep)])

    print("  Default plan: PASSED")


def test_default_plan_order():
    names = default_plan().names()

    assert len(names) == len(set(names))
    for index, step in enumerate(default_plan()):
        for ref in step.refs():
            if ref not in EXTERNAL:
                assert names.index(ref) < index, f"{step.logical_name} uses {ref} before it exists"
