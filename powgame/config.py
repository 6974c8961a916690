"""
Configuration management for the POW game tooling

Loads settings from environment variables and .env file.
Includes logging configuration with file output and correlation ID support.
"""

import os
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, List

from dotenv import load_dotenv


def _load_env_file():
    """Load .env file from project root"""
    # Project root is the parent of the powgame package
    env_file = Path(__file__).parent.parent / ".env"

    if env_file.exists():
        load_dotenv(env_file)


# Load .env on module import
_load_env_file()


def _get_env(key: str, default: Optional[str] = "") -> Optional[str]:
    """Get environment variable with default"""
    value = os.getenv(key)
    if value is None:
        return default
    return value


def _get_env_float(key: str, default: float) -> float:
    """Get environment variable as float"""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Invalid float value for {key}='{value}', using default={default}"
        )
        return default


def _get_env_int(key: str, default: int) -> int:
    """Get environment variable as int"""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Invalid int value for {key}='{value}', using default={default}"
        )
        return default


def _get_env_bool(key: str, default: bool) -> bool:
    """Get environment variable as bool"""
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


@dataclass
class RpcConfig:
    """JSON-RPC node configuration"""
    url: str = field(default_factory=lambda: _get_env("JSON_RPC_URL", "http://localhost:8545"))
    timeout_seconds: float = field(default_factory=lambda: _get_env_float("RPC_TIMEOUT_SECONDS", 30.0))
    # Seconds to wait for a transaction receipt
    receipt_timeout: int = field(default_factory=lambda: _get_env_int("TX_RECEIPT_TIMEOUT", 120))


@dataclass
class SignerConfig:
    """
    Deployer/operator account configuration

    If MNEMONIC is set, a local account is derived from it. Otherwise the
    node-managed account at SIGNER_INDEX is used (hardhat/anvil style).
    """
    mnemonic: Optional[str] = field(default_factory=lambda: _get_env("MNEMONIC", None))
    account_path: str = field(default_factory=lambda: _get_env("MNEMONIC_ACCOUNT_PATH", "m/44'/60'/0'/0/0"))
    signer_index: int = field(default_factory=lambda: _get_env_int("SIGNER_INDEX", 0))


@dataclass
class TxConfig:
    """Transaction configuration"""
    max_retries: int = field(default_factory=lambda: _get_env_int("TX_MAX_RETRIES", 3))
    retry_delay: float = field(default_factory=lambda: _get_env_float("TX_RETRY_DELAY", 2.0))
    # Multiplier for gas limit estimates to provide buffer
    gas_limit_multiplier: float = field(default_factory=lambda: _get_env_float("TX_GAS_LIMIT_MULTIPLIER", 1.2))


@dataclass
class DeploymentConfig:
    """Deployment records, compiled artifacts and the live deployment registry"""
    deployments_dir: str = field(default_factory=lambda: _get_env("DEPLOYMENTS_DIR", "deployments"))
    artifacts_dir: str = field(default_factory=lambda: _get_env("ARTIFACTS_DIR", "artifacts"))
    # Optional HTTP deployment registry queried when no local record exists
    registry_url: str = field(default_factory=lambda: _get_env("DEPLOYMENT_REGISTRY_URL", ""))
    registry_timeout: float = field(default_factory=lambda: _get_env_float("DEPLOYMENT_REGISTRY_TIMEOUT", 10.0))


@dataclass
class GameConfig:
    """Market parameters used to size the initial liquidity"""
    eth_price: int = field(default_factory=lambda: _get_env_int("ETH_PRICE", 3498))
    usdc_price: int = field(default_factory=lambda: _get_env_int("USDC_PRICE", 1))
    # USD value of the initial WETH side of the POW1 pool
    initial_lppow1_weth_value: int = field(default_factory=lambda: _get_env_int("INITIAL_LPPOW1_WETH_VALUE", 100))
    # USD value of the initial USDC side of the POW5 pool
    initial_lppow5_usdc_value: int = field(default_factory=lambda: _get_env_int("INITIAL_LPPOW5_USDC_VALUE", 100))


def _get_default_log_path() -> str:
    """Get default log file path under powgame/log/ with UTC timestamp"""
    from datetime import datetime, timezone
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    log_dir = Path(__file__).parent / "log"
    return str(log_dir / f"powgame_{timestamp}.log")


@dataclass
class LoggingConfig:
    """
    Logging configuration with file output and correlation ID support.

    Environment variables:
        LOG_FILE: Path to log file (overrides default, empty disables file output)
        LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL (default: INFO)
        LOG_FORMAT: Custom log format string
        LOG_CONSOLE: Enable console output (default: true)
        LOG_MAX_BYTES: Max log file size before rotation (default: 10MB)
        LOG_BACKUP_COUNT: Number of backup files to keep (default: 5)
    """
    log_file: str = field(default_factory=lambda: _get_env("LOG_FILE", _get_default_log_path()))
    log_level: str = field(default_factory=lambda: _get_env("LOG_LEVEL", "INFO"))
    log_format: str = field(default_factory=lambda: _get_env(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    ))
    console_output: bool = field(default_factory=lambda: _get_env_bool("LOG_CONSOLE", True))
    max_bytes: int = field(default_factory=lambda: _get_env_int("LOG_MAX_BYTES", 10 * 1024 * 1024))  # 10MB
    backup_count: int = field(default_factory=lambda: _get_env_int("LOG_BACKUP_COUNT", 5))

    @property
    def level(self) -> int:
        """Get numeric log level"""
        return getattr(logging, self.log_level.upper(), logging.INFO)


@dataclass
class Config:
    """
    Main configuration container

    Usage:
        from powgame.config import config

        print(config.rpc.url)
        print(config.deployment.deployments_dir)
    """
    rpc: RpcConfig = field(default_factory=RpcConfig)
    signer: SignerConfig = field(default_factory=SignerConfig)
    tx: TxConfig = field(default_factory=TxConfig)
    deployment: DeploymentConfig = field(default_factory=DeploymentConfig)
    game: GameConfig = field(default_factory=GameConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Global config instance
config = Config()


def setup_logging(
    log_config: Optional[LoggingConfig] = None,
    logger_name: str = "powgame",
) -> logging.Logger:
    """
    Set up logging based on configuration.

    Creates handlers for file and/or console output with rotation.
    The log file directory is created automatically if it doesn't exist.

    Args:
        log_config: Logging configuration (uses global config if None)
        logger_name: Name of the logger to configure (default: powgame)

    Returns:
        Configured logger instance
    """
    if log_config is None:
        log_config = config.logging

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_config.level)

    # Close handlers before removing to release file handles on reload
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(log_config.log_format)

    handlers: List[logging.Handler] = []

    if log_config.log_file:
        from logging.handlers import RotatingFileHandler

        log_path = Path(log_config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_config.log_file,
            maxBytes=log_config.max_bytes,
            backupCount=log_config.backup_count,
            encoding='utf-8',
        )
        file_handler.setLevel(log_config.level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if log_config.console_output:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_config.level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    for handler in handlers:
        logger.addHandler(handler)

    # Child loggers inherit handlers from the parent
    for name in [
        f"{logger_name}.addresses",
        f"{logger_name}.deploy",
        f"{logger_name}.game",
        f"{logger_name}.infra",
    ]:
        logging.getLogger(name).setLevel(log_config.level)

    if log_config.log_file:
        logger.info(f"Logging initialized: file={log_config.log_file}, level={log_config.log_level}")

    return logger
