"""
Test Errors Module

Tests for powgame.errors package.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))


def test_error_code():
    from powgame.errors import ErrorCode

    print("Testing ErrorCode...")

    assert ErrorCode.RPC_CONNECTION_FAILED.value == "1001"
    assert ErrorCode.TX_REVERTED.value == "2002"
    assert ErrorCode.SLIPPAGE_EXCEEDED.value == "3001"
    assert ErrorCode.DEPLOYMENT_FAILED.value == "5001"
    assert ErrorCode.PRECONDITION_VIOLATED.value == "8001"

    print("  ErrorCode: PASSED")


def test_base_error():
    from powgame.errors import ErrorCode, PowGameError

    print("Testing PowGameError...")

    error = PowGameError(
        message="Test error",
        code=ErrorCode.RPC_CONNECTION_FAILED,
        recoverable=True,
    )

    assert str(error) == "[1001] Test error"
    assert error.should_retry
    assert error.details == {}

    print("  PowGameError: PASSED")


def test_rpc_error():
    from powgame.errors import ErrorCode, RpcError

    print("Testing RpcError...")

    error1 = RpcError.connection_failed("http://localhost:8545")
    assert error1.code == ErrorCode.RPC_CONNECTION_FAILED
    assert error1.recoverable
    assert error1.endpoint == "http://localhost:8545"

    error2 = RpcError.timeout("http://localhost:8545", 30.0)
    assert error2.code == ErrorCode.RPC_TIMEOUT
    assert "30.0s" in str(error2)

    print("  RpcError: PASSED")


def test_transaction_reverted():
    from powgame.errors import ErrorCode, TransactionReverted

    print("Testing TransactionReverted...")

    error = TransactionReverted.reverted("UniswapV3Pool.initialize", tx_hash="0xabc", reason="AI")
    assert error.code == ErrorCode.TX_REVERTED
    assert error.reason == "AI"
    assert error.tx_hash == "0xabc"
    assert not error.recoverable
    assert "reverted: AI" in str(error)

    assert TransactionReverted.send_failed("grantRole", "connection reset").recoverable
    assert not TransactionReverted.send_failed("grantRole", "insufficient funds").recoverable

    print("  TransactionReverted: PASSED")


def test_precondition_violations():
    from powgame.errors import (
        ErrorCode,
        InvalidSlotState,
        PoolTokenMismatch,
        PreconditionViolation,
    )

    print("Testing PreconditionViolation family...")

    missing = PreconditionViolation.missing_address("dutchAuction")
    assert missing.details == {"name": "dutchAuction"}
    assert not missing.recoverable

    mismatch = PoolTokenMismatch.for_pool("pow1Pool", "0xpool", "0xa", "0xb")
    assert isinstance(mismatch, PreconditionViolation)
    assert mismatch.code == ErrorCode.POOL_TOKEN_MISMATCH
    assert mismatch.token0 == "0xa"

    slot = InvalidSlotState.expected(2, "sold", "active")
    assert isinstance(slot, PreconditionViolation)
    assert slot.state == "sold"
    assert InvalidSlotState.unknown(9).state == "unset"

    print("  PreconditionViolation family: PASSED")


def test_deployment_and_slippage_errors():
    from powgame.errors import DeploymentFailed, SlippageExceeded

    print("Testing DeploymentFailed and SlippageExceeded...")

    failed = DeploymentFailed.reverted("DutchAuction", "0xdead", "out of gas")
    assert failed.contract_name == "DutchAuction"
    assert "out of gas" in str(failed)

    slippage = SlippageExceeded.dust_loss(2, 1000, 1001, 0)
    assert slippage.max_loss == 1000
    assert slippage.details["game_dust"] == 1001

    print("  DeploymentFailed and SlippageExceeded: PASSED")


def test_signer_and_config_errors():
    from powgame.errors import ConfigurationError, ErrorCode, SignerError

    assert SignerError.not_configured().code == ErrorCode.SIGNER_NOT_CONFIGURED
    assert ConfigurationError.missing("JSON_RPC_URL").code == ErrorCode.CONFIG_MISSING
    assert "ETH_PRICE" in str(ConfigurationError.invalid("ETH_PRICE", "must be positive"))


if __name__ == "__main__":
    test_error_code()
    test_base_error()
    test_rpc_error()
    test_transaction_reverted()
    test_precondition_violations()
    test_deployment_and_slippage_errors()
    test_signer_and_config_errors()
