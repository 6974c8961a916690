"""
Unit tests for retry logic module
"""

import sys
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from powgame.errors import ErrorCode, PreconditionViolation, RpcError
from powgame.infra.retry import (
    CorrelationContext,
    classify_error,
    execute_with_retry,
    generate_correlation_id,
    get_correlation_id,
    is_recoverable_message,
)
from powgame.types import TxResult, TxStatus


class TestClassifyError(unittest.TestCase):
    """Tests for error classification"""

    def test_timeout_error_is_recoverable(self):
        is_recoverable, error_code = classify_error(Exception("Request timed out after 30 seconds"))

        self.assertTrue(is_recoverable)
        self.assertEqual(error_code, ErrorCode.RPC_TIMEOUT)

    def test_connection_error_is_recoverable(self):
        is_recoverable, error_code = classify_error(Exception("ECONNRESET: connection closed"))

        self.assertTrue(is_recoverable)
        self.assertEqual(error_code, ErrorCode.RPC_CONNECTION_FAILED)

    def test_rate_limit_error_is_recoverable(self):
        is_recoverable, error_code = classify_error(Exception("429 Too many requests"))

        self.assertTrue(is_recoverable)
        self.assertEqual(error_code, ErrorCode.RPC_RATE_LIMITED)

    def test_revert_is_not_recoverable(self):
        is_recoverable, error_code = classify_error(Exception("execution reverted: AccessControl"))

        self.assertFalse(is_recoverable)
        self.assertIsNone(error_code)

    def test_pow_game_error_keeps_its_classification(self):
        is_recoverable, error_code = classify_error(RpcError.timeout("http://localhost:8545", 5))

        self.assertTrue(is_recoverable)
        self.assertEqual(error_code, ErrorCode.RPC_TIMEOUT)

    def test_recoverable_message(self):
        self.assertTrue(is_recoverable_message("503 Service Unavailable"))
        self.assertFalse(is_recoverable_message("nonce too low"))
        self.assertFalse(is_recoverable_message(None))


class TestExecuteWithRetry(unittest.TestCase):
    """Tests for execute_with_retry"""

    @patch("powgame.infra.retry.time.sleep")
    def test_success_first_attempt(self, mock_sleep):
        operation = MagicMock(return_value=TxResult.success("0xabc"))

        result = execute_with_retry(operation, "grantRole", max_retries=3, retry_delay=1)

        self.assertTrue(result.is_success)
        operation.assert_called_once()
        mock_sleep.assert_not_called()

    @patch("powgame.infra.retry.time.sleep")
    def test_recoverable_result_is_retried(self, mock_sleep):
        operation = MagicMock(side_effect=[
            TxResult.failed("connection reset", recoverable=True),
            TxResult.success("0xabc"),
        ])

        result = execute_with_retry(operation, "approve", max_retries=3, retry_delay=1)

        self.assertTrue(result.is_success)
        self.assertEqual(operation.call_count, 2)
        mock_sleep.assert_called_once_with(1)

    @patch("powgame.infra.retry.time.sleep")
    def test_non_recoverable_result_returned(self, mock_sleep):
        operation = MagicMock(return_value=TxResult.failed("execution reverted"))

        result = execute_with_retry(operation, "initialize", max_retries=3, retry_delay=1)

        self.assertEqual(result.status, TxStatus.FAILED)
        operation.assert_called_once()

    @patch("powgame.infra.retry.time.sleep")
    def test_linear_backoff(self, mock_sleep):
        operation = MagicMock(side_effect=Exception("network unreachable"))

        result = execute_with_retry(operation, "deploy", max_retries=3, retry_delay=2)

        self.assertTrue(result.is_failed)
        self.assertEqual(operation.call_count, 3)
        self.assertEqual([c.args[0] for c in mock_sleep.call_args_list], [2, 4])

    @patch("powgame.infra.retry.time.sleep")
    def test_fatal_error_propagates(self, mock_sleep):
        operation = MagicMock(side_effect=PreconditionViolation.missing_address("lpSft"))

        with self.assertRaises(PreconditionViolation):
            execute_with_retry(operation, "grantRole", max_retries=3, retry_delay=1)
        operation.assert_called_once()

    @patch("powgame.infra.retry.time.sleep")
    def test_unknown_exception_becomes_failed_result(self, mock_sleep):
        operation = MagicMock(side_effect=ValueError("bad abi"))

        result = execute_with_retry(operation, "deploy", max_retries=3, retry_delay=1)

        self.assertTrue(result.is_failed)
        self.assertFalse(result.recoverable)
        self.assertIn("bad abi", result.error)


class TestCorrelationContext(unittest.TestCase):
    def test_generate_correlation_id(self):
        self.assertEqual(len(generate_correlation_id()), 12)

    def test_context_sets_and_resets(self):
        self.assertIsNone(get_correlation_id())
        with CorrelationContext("roles") as cid:
            self.assertTrue(cid.startswith("roles_"))
            self.assertEqual(get_correlation_id(), cid)
        self.assertIsNone(get_correlation_id())


if __name__ == "__main__":
    unittest.main()
