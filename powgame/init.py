"""
Game initialization entry point

Grants roles, initializes the pools and bootstraps the Dutch auction on a
network where the contracts are already deployed. Safe to re-run: every
step reads state and sends only what is missing.

Usage:
    powgame-init
    python -m powgame.init
"""

import logging
import sys
from dataclasses import dataclass, field
from typing import List, Optional

from web3 import Web3

from .addresses import AddressResolver, DeploymentRecordStore, HttpDeploymentStore
from .config import Config, config as global_config, setup_logging
from .constants import INITIAL_POW1_SUPPLY, weth_amount_for_usd
from .contracts import ContractLibrary
from .errors import PowGameError
from .game.admin import DutchAuctionManager, PermissionManager, PoolManager
from .infra.evm_signer import Signer, create_signer, create_web3
from .infra.network import network_name
from .infra.retry import CorrelationContext
from .types import Registry, TxResult
from .utils.lp_nft import extract_json_from_uri

logger = logging.getLogger(__name__)


@dataclass
class InitReport:
    """What an initialization run did"""
    network: str
    role_receipts: List[TxResult] = field(default_factory=list)
    pool_receipts: List[TxResult] = field(default_factory=list)
    auction_receipts: List[TxResult] = field(default_factory=list)
    lp_sft_token_ids: List[int] = field(default_factory=list)
    lp_nft_image: Optional[str] = None

    @property
    def transaction_count(self) -> int:
        return len(self.role_receipts) + len(self.pool_receipts) + len(self.auction_receipts)


def build_resolver(network: str, cfg: Optional[Config] = None) -> AddressResolver:
    cfg = cfg or global_config
    resolver = AddressResolver(Registry(), DeploymentRecordStore(cfg.deployment.deployments_dir))
    if cfg.deployment.registry_url:
        resolver.register_backing_store(
            network,
            HttpDeploymentStore(cfg.deployment.registry_url, network, timeout=cfg.deployment.registry_timeout),
        )
    return resolver


def inspect_lp_sft(library: ContractLibrary, owner: str, report: InitReport) -> None:
    """Log the owner's LP-SFTs and the image of the first one"""
    lp_sft = library.lp_sft()
    report.lp_sft_token_ids = lp_sft.get_token_ids(owner)
    logger.info(f"LP-SFT token IDs: {report.lp_sft_token_ids}")

    if report.lp_sft_token_ids:
        metadata = extract_json_from_uri(lp_sft.uri(report.lp_sft_token_ids[0]))
        report.lp_nft_image = metadata.get("image")
        logger.info(f"LP-NFT image: {report.lp_nft_image}")


def initialize_game(
    web3: Web3,
    signer: Signer,
    network: Optional[str] = None,
    resolver: Optional[AddressResolver] = None,
    cfg: Optional[Config] = None,
) -> InitReport:
    """
    Run every initialization step against a deployed game

    The signer doubles as the beneficiary of the first LP-SFT.
    """
    cfg = cfg or global_config
    network = network or network_name(chain_id=web3.eth.chain_id)
    resolver = resolver or build_resolver(network, cfg)
    logger.info(f"Chain: {network}")

    book = resolver.get_address_book(network)
    library = ContractLibrary(web3, signer, book)
    report = InitReport(network=network)
    beneficiary = signer.address

    with CorrelationContext("roles") as cid:
        logger.info(f"[{cid}] Granting roles...")
        report.role_receipts = PermissionManager(library).initialize_roles()

    with CorrelationContext("pools") as cid:
        logger.info(f"[{cid}] Initializing Uniswap V3 pools...")
        report.pool_receipts = PoolManager(library, cfg.game).initialize_pools()

    with CorrelationContext("auction") as cid:
        logger.info(f"[{cid}] Initializing dutch auction...")
        weth_amount = weth_amount_for_usd(cfg.game.initial_lppow1_weth_value, cfg.game.eth_price)
        auction = DutchAuctionManager.from_library(library, signer.address)
        auction.initialize(INITIAL_POW1_SUPPLY, weth_amount, beneficiary)
        auction.create_initial_auctions()
        report.auction_receipts = list(auction.executed)

    inspect_lp_sft(library, beneficiary, report)

    logger.info(f"Game initialization complete ({report.transaction_count} transactions)")
    return report


def main() -> int:
    setup_logging()
    logger.info("Starting game initialization...")

    web3 = create_web3(global_config.rpc.url, timeout=global_config.rpc.timeout_seconds)
    signer = create_signer(
        web3,
        mnemonic=global_config.signer.mnemonic,
        account_path=global_config.signer.account_path,
        signer_index=global_config.signer.signer_index,
    )
    logger.info(f"Deployer address: {signer.address}")

    initialize_game(web3, signer)
    return 0


def run() -> None:
    try:
        sys.exit(main())
    except PowGameError as e:
        logger.error(f"Game initialization failed: {e}")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Game initialization failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    run()
