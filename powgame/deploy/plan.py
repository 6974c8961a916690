"""
Declarative deployment plan

A plan is an ordered list of steps. Constructor arguments are literals,
`Ref("<logicalName>")` for an address that an earlier step (or the static
registry) provides, or `DEPLOYER` for the operating account.
"""

from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Tuple, Union

from ..constants import FARM_REWARD_RATE
from ..contracts.abis import UNISWAP_V3_POOL_ABI
from ..utils.tick_math import LPPOW1_POOL_FEE, LPPOW5_POOL_FEE


@dataclass(frozen=True)
class Ref:
    """Constructor argument taken from the address book"""
    name: str


class _Deployer:
    def __repr__(self) -> str:
        return "DEPLOYER"


DEPLOYER = _Deployer()


@dataclass(frozen=True)
class DeployStep:
    """
    Deploy one logical contract unless it is already known

    artifact names the compiled contract when it differs from the
    deployment name (several farms share one implementation).
    """
    logical_name: str
    args: Tuple[Any, ...] = ()
    artifact: Optional[str] = None

    def refs(self) -> List[str]:
        return [arg.name for arg in self.args if isinstance(arg, Ref)]


@dataclass(frozen=True)
class ReadStep:
    """
    Record an address that an already-deployed contract reports

    Used for pools, which a pool factory creates in its constructor.
    """
    logical_name: str
    source: str
    function: str
    abi: List[dict] = field(default_factory=list, compare=False)

    def refs(self) -> List[str]:
        return [self.source]


Step = Union[DeployStep, ReadStep]


class DeploymentPlan:
    """Ordered deployment steps"""

    def __init__(self, steps: Optional[List[Step]] = None):
        self.steps: List[Step] = list(steps or [])

    def add(self, step: Step) -> "DeploymentPlan":
        self.steps.append(step)
        return self

    def names(self) -> List[str]:
        return [step.logical_name for step in self.steps]

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)

    def __len__(self) -> int:
        return len(self.steps)


def _token_steps() -> List[Step]:
    return [
        DeployStep("pow1Token", (DEPLOYER,)),
        DeployStep("pow5Token", (DEPLOYER,)),
        DeployStep("lpPow1Token", (DEPLOYER,)),
        DeployStep("lpPow5Token", (DEPLOYER,)),
        DeployStep("noPow5Token", (DEPLOYER,)),
        DeployStep(
            "lpNft",
            (
                Ref("pow1Token"),
                Ref("pow5Token"),
                Ref("lpPow1Token"),
                Ref("lpPow5Token"),
                Ref("noPow5Token"),
                Ref("uniswapV3NftManager"),
            ),
        ),
        DeployStep(
            "lpSft",
            (
                DEPLOYER,
                Ref("lpNft"),
                Ref("pow1Token"),
                Ref("pow5Token"),
                Ref("lpPow1Token"),
                Ref("lpPow5Token"),
                Ref("uniswapV3NftManager"),
            ),
        ),
        DeployStep("noLpSft", (DEPLOYER, Ref("lpSft"))),
    ]


def _pool_steps(prefix: str, game_token: str, asset_token: str, fee: int) -> List[Step]:
    pool = f"{prefix}Pool"
    return [
        DeployStep(
            f"{prefix}PoolFactory",
            (Ref("uniswapV3Factory"), Ref(game_token), Ref(asset_token), int(fee)),
            artifact="UniV3PoolFactory",
        ),
        ReadStep(pool, f"{prefix}PoolFactory", "uniswapV3Pool", UNISWAP_V3_POOL_ABI),
        DeployStep(
            f"{prefix}Swapper",
            (Ref(pool), Ref(game_token), Ref(asset_token)),
            artifact="UniV3Swapper",
        ),
        DeployStep(
            f"{prefix}Pooler",
            (Ref(f"{prefix}Swapper"), Ref("uniswapV3NftManager")),
            artifact="UniV3Pooler",
        ),
        DeployStep(
            f"{prefix}Staker",
            (
                DEPLOYER,
                Ref(f"{prefix}Pooler"),
                Ref("uniswapV3Staker"),
                Ref("lpSft"),
                Ref("pow1Token"),
            ),
            artifact="UniV3Staker",
        ),
    ]


def _defi_steps() -> List[Step]:
    return [
        DeployStep(
            "defiManager",
            (
                DEPLOYER,
                Ref("pow1Token"),
                Ref("pow5Token"),
                Ref("lpPow1Token"),
                Ref("lpPow5Token"),
                Ref("noPow5Token"),
                Ref("lpSft"),
            ),
        ),
        DeployStep(
            "pow1LpNftStakeFarm",
            (
                Ref("lpSft"),
                Ref("pow1Token"),
                Ref("lpPow1Token"),
                Ref("pow1Token"),
                Ref("pow5Token"),
                Ref("uniswapV3NftManager"),
                FARM_REWARD_RATE,
            ),
            artifact="LPNFTStakeFarm",
        ),
        DeployStep(
            "pow1LpSftLendFarm",
            (DEPLOYER, Ref("lpSft"), Ref("pow1Token"), Ref("lpPow1Token"), FARM_REWARD_RATE),
            artifact="LPSFTLendFarm",
        ),
        DeployStep(
            "pow5LpNftStakeFarm",
            (
                DEPLOYER,
                Ref("lpSft"),
                Ref("pow1Token"),
                Ref("pow5Pool"),
                Ref("uniswapV3NftManager"),
                Ref("uniswapV3Staker"),
            ),
            artifact="UniV3StakeFarm",
        ),
        DeployStep(
            "pow5LpSftLendFarm",
            (DEPLOYER, Ref("lpSft"), Ref("pow1Token"), Ref("lpPow1Token"), FARM_REWARD_RATE),
            artifact="LPSFTLendFarm",
        ),
        DeployStep(
            "pow5InterestFarm",
            (DEPLOYER, Ref("pow1Token"), FARM_REWARD_RATE),
            artifact="ERC20InterestFarm",
        ),
    ]


def _bureau_steps() -> List[Step]:
    return [
        DeployStep(
            "dutchAuction",
            (
                DEPLOYER,
                Ref("pow1Token"),
                Ref("wrappedNativeToken"),
                Ref("lpSft"),
                Ref("pow1Pooler"),
                Ref("pow1Swapper"),
                Ref("pow1LpNftStakeFarm"),
                Ref("uniswapV3NftManager"),
                Ref("pow1Pool"),
            ),
        ),
        DeployStep(
            "yieldHarvest",
            (Ref("lpSft"), Ref("noLpSft"), Ref("pow1LpSftLendFarm"), Ref("defiManager")),
        ),
        DeployStep(
            "liquidityForge",
            (
                Ref("lpSft"),
                Ref("noLpSft"),
                Ref("defiManager"),
                Ref("pow5Token"),
                Ref("yieldHarvest"),
                Ref("pow5InterestFarm"),
            ),
        ),
        DeployStep(
            "reverseRepo",
            (
                DEPLOYER,
                Ref("pow5Token"),
                Ref("usdcToken"),
                Ref("lpSft"),
                Ref("pow5Pooler"),
                Ref("pow5Swapper"),
                Ref("pow5LpNftStakeFarm"),
                Ref("uniswapV3NftManager"),
                Ref("pow5Pool"),
            ),
        ),
    ]


def default_plan() -> DeploymentPlan:
    """
    Full game deployment: tokens, pools and routes, DeFi farms, then bureaus

    Uniswap, WETH and USDC are expected in the address book already
    (static registry or earlier records).
    """
    steps: List[Step] = []
    steps.extend(_token_steps())
    steps.extend(_pool_steps("pow1", "pow1Token", "wrappedNativeToken", LPPOW1_POOL_FEE))
    steps.extend(_pool_steps("pow5", "pow5Token", "usdcToken", LPPOW5_POOL_FEE))
    steps.extend(_defi_steps())
    steps.extend(_bureau_steps())
    return DeploymentPlan(steps)
