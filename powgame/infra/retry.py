"""
Retry Logic Helper Module

Retries transaction submission on transient RPC failures and tags log lines
with correlation IDs so one provisioning step can be traced end to end.
"""

import logging
import time
import uuid
import contextvars
from typing import Callable, Tuple, Optional

from ..types import TxResult
from ..errors import ErrorCode, PowGameError
from ..config import config as global_config

logger = logging.getLogger(__name__)

_correlation_id: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    'correlation_id', default=None
)


def generate_correlation_id() -> str:
    """Generate a unique correlation ID for transaction tracing."""
    return uuid.uuid4().hex[:12]


def get_correlation_id() -> Optional[str]:
    return _correlation_id.get()


def set_correlation_id(correlation_id: Optional[str]) -> contextvars.Token:
    """Set the correlation ID in context. Returns token for reset."""
    return _correlation_id.set(correlation_id)


class CorrelationContext:
    """
    Context manager for correlation ID scoping.

    Usage:
        with CorrelationContext("roles") as cid:
            logger.info(f"[{cid}] Granting roles")
            manager.initialize_roles()
    """

    def __init__(self, prefix: Optional[str] = None):
        self.correlation_id = generate_correlation_id()
        if prefix:
            self.correlation_id = f"{prefix}_{self.correlation_id}"
        self._token: Optional[contextvars.Token] = None

    def __enter__(self) -> str:
        self._token = set_correlation_id(self.correlation_id)
        return self.correlation_id

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._token is not None:
            _correlation_id.reset(self._token)


def log_with_correlation(
    level: int,
    message: str,
    operation_name: str,
    attempt: Optional[int] = None,
    max_retries: Optional[int] = None,
    **extra
):
    """Log with the current correlation ID and operation context."""
    cid = get_correlation_id()

    parts = []
    if cid:
        parts.append(f"[{cid}]")
    parts.append(f"[{operation_name}]")
    if attempt is not None and max_retries is not None:
        parts.append(f"[{attempt}/{max_retries}]")
    parts.append(message)

    extra_context = {
        "correlation_id": cid,
        "operation": operation_name,
        "attempt": attempt,
        "max_retries": max_retries,
        **extra
    }

    logger.log(level, " ".join(parts), extra=extra_context)


RECOVERABLE_KEYWORDS = [
    "timeout", "timed out", "connection", "network", "rate limit",
    "too many requests", "503", "502", "504",
    "temporarily unavailable", "service unavailable",
    "econnreset", "enotfound", "etimedout",
    "socket hang up", "request failed",
]


def classify_error(error: Exception) -> Tuple[bool, Optional[ErrorCode]]:
    """
    Classify an error as recoverable (worth retrying) or not.

    Returns:
        Tuple of (is_recoverable, error_code)
    """
    if isinstance(error, PowGameError):
        return error.recoverable, error.code

    error_str = str(error).lower()
    is_recoverable = any(keyword in error_str for keyword in RECOVERABLE_KEYWORDS)
    if not is_recoverable:
        return False, None

    if "timeout" in error_str or "timed out" in error_str:
        return True, ErrorCode.RPC_TIMEOUT
    if any(kw in error_str for kw in ["connection", "network", "socket"]):
        return True, ErrorCode.RPC_CONNECTION_FAILED
    if "rate limit" in error_str or "too many requests" in error_str:
        return True, ErrorCode.RPC_RATE_LIMITED
    return True, ErrorCode.RPC_INVALID_RESPONSE


def is_recoverable_message(message: Optional[str]) -> bool:
    """Whether an error string from a failed send looks transient"""
    if not message:
        return False
    lowered = message.lower()
    return any(keyword in lowered for keyword in RECOVERABLE_KEYWORDS)


def execute_with_retry(
    operation: Callable[[], TxResult],
    operation_name: str,
    max_retries: Optional[int] = None,
    retry_delay: Optional[float] = None,
) -> TxResult:
    """
    Execute an operation with retry on recoverable failures.

    Linear backoff (delay, 2*delay, 3*delay...). Non-recoverable PowGameErrors
    propagate unchanged; other exceptions become a failed TxResult.

    Args:
        operation: Callable that returns a TxResult
        operation_name: Name for logging purposes
        max_retries: Maximum attempts (defaults to config.tx.max_retries)
        retry_delay: Base delay between retries in seconds (defaults to config.tx.retry_delay)
    """
    max_retries = max_retries if max_retries is not None else global_config.tx.max_retries
    retry_delay = retry_delay if retry_delay is not None else global_config.tx.retry_delay
    max_retries = max(1, max_retries)
    last_error: Optional[Exception] = None

    for attempt in range(max_retries):
        try:
            result = operation()

            if result.is_success:
                if attempt > 0:
                    log_with_correlation(
                        logging.INFO,
                        f"Succeeded after {attempt + 1} attempts",
                        operation_name,
                        attempt + 1,
                        max_retries,
                    )
                return result

            if result.recoverable and attempt < max_retries - 1:
                log_with_correlation(
                    logging.WARNING,
                    f"Recoverable error: {result.error}",
                    operation_name,
                    attempt + 1,
                    max_retries,
                    error=result.error,
                )
                time.sleep(retry_delay * (attempt + 1))
                continue

            return result

        except PowGameError as e:
            last_error = e
            if e.recoverable and attempt < max_retries - 1:
                log_with_correlation(
                    logging.WARNING,
                    f"Recoverable error: {e}",
                    operation_name,
                    attempt + 1,
                    max_retries,
                    error_type="recoverable",
                )
                time.sleep(retry_delay * (attempt + 1))
                continue
            raise

        except Exception as e:
            last_error = e
            is_recoverable, error_code = classify_error(e)

            if is_recoverable and attempt < max_retries - 1:
                log_with_correlation(
                    logging.WARNING,
                    f"Recoverable error: {e}",
                    operation_name,
                    attempt + 1,
                    max_retries,
                    error_type="recoverable",
                )
                time.sleep(retry_delay * (attempt + 1))
                continue

            log_with_correlation(
                logging.ERROR,
                f"Failed: {e}",
                operation_name,
                attempt + 1,
                max_retries,
                error_type="fatal",
            )
            return TxResult.failed(
                str(e),
                recoverable=is_recoverable,
                error_code=error_code.value if error_code else None,
            )

    error_msg = f"Max retries ({max_retries}) exceeded"
    if last_error:
        error_msg += f". Last error: {last_error}"

    log_with_correlation(logging.ERROR, error_msg, operation_name, max_retries, max_retries)
    return TxResult.failed(error_msg, recoverable=True)
