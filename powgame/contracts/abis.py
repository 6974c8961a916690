"""
Minimal ABIs for the contract calls this package makes
"""


def _fn(name, inputs=(), outputs=(), mutability="view"):
    return {
        "type": "function",
        "name": name,
        "inputs": [{"name": n, "type": t} for n, t in inputs],
        "outputs": [{"name": n, "type": t} for n, t in outputs],
        "stateMutability": mutability,
    }


def _tuple(name, components):
    return {
        "name": name,
        "type": "tuple",
        "components": [{"name": n, "type": t} for n, t in components],
    }


_AUCTION_STATE_COMPONENTS = (
    ("lpNftTokenId", "uint256"),
    ("startPriceBips", "uint256"),
    ("endPriceBips", "uint256"),
    ("startTime", "uint64"),
    ("salePrice", "uint256"),
)


ACCESS_CONTROL_ABI = [
    _fn("hasRole", [("role", "bytes32"), ("account", "address")], [("", "bool")]),
    _fn("grantRole", [("role", "bytes32"), ("account", "address")], [], "nonpayable"),
    _fn("revokeRole", [("role", "bytes32"), ("account", "address")], [], "nonpayable"),
]

ERC20_ABI = [
    _fn("name", [], [("", "string")]),
    _fn("symbol", [], [("", "string")]),
    _fn("decimals", [], [("", "uint8")]),
    _fn("totalSupply", [], [("", "uint256")]),
    _fn("balanceOf", [("account", "address")], [("", "uint256")]),
    _fn("allowance", [("owner", "address"), ("spender", "address")], [("", "uint256")]),
    _fn("approve", [("spender", "address"), ("value", "uint256")], [("", "bool")], "nonpayable"),
    _fn("transfer", [("to", "address"), ("value", "uint256")], [("", "bool")], "nonpayable"),
]

WRAPPED_NATIVE_ABI = ERC20_ABI + [
    _fn("deposit", [], [], "payable"),
    _fn("withdraw", [("wad", "uint256")], [], "nonpayable"),
]

UNISWAP_V3_POOL_ABI = [
    _fn(
        "slot0",
        [],
        [
            ("sqrtPriceX96", "uint160"),
            ("tick", "int24"),
            ("observationIndex", "uint16"),
            ("observationCardinality", "uint16"),
            ("observationCardinalityNext", "uint16"),
            ("feeProtocol", "uint8"),
            ("unlocked", "bool"),
        ],
    ),
    _fn("token0", [], [("", "address")]),
    _fn("token1", [], [("", "address")]),
    _fn("fee", [], [("", "uint24")]),
    _fn("liquidity", [], [("", "uint128")]),
    _fn("initialize", [("sqrtPriceX96", "uint160")], [], "nonpayable"),
]

LPSFT_ABI = ACCESS_CONTROL_ABI + [
    _fn("getTokenIds", [("account", "address")], [("", "uint256[]")]),
    _fn("uri", [("tokenId", "uint256")], [("", "string")]),
    _fn("balanceOf", [("account", "address"), ("id", "uint256")], [("", "uint256")]),
]

DUTCH_AUCTION_ABI = [
    # Admin actions
    _fn(
        "initialize",
        [("gameTokenAmount", "uint256"), ("assetTokenAmount", "uint256"), ("receiver", "address")],
        [("", "uint256")],
        "nonpayable",
    ),
    _fn("isInitialized", [], [("", "bool")]),
    _fn("setAuctionCount", [("auctionCount", "uint256"), ("dustAmount", "uint256")], [], "nonpayable"),
    _fn(
        "setAuction",
        [
            ("slot", "uint256"),
            ("targetPrice", "uint256"),
            ("priceDecayConstant", "uint256"),
            ("dustLossAmount", "uint256"),
        ],
        [],
        "nonpayable",
    ),
    _fn("removeAuction", [("slot", "uint256")], [], "nonpayable"),
    # State
    _fn("getAuctionCount", [], [("", "uint256")]),
    _fn("getCurrentAuctions", [], [("", "uint256[]")]),
    _fn("getPrice", [("slot", "uint256")], [("", "uint256")]),
    _fn("getCurrentPriceBips", [("lpNftTokenId", "uint256")], [("", "uint256")]),
    {
        "type": "function",
        "name": "getAuctionSettings",
        "inputs": [],
        "outputs": [
            _tuple(
                "",
                (
                    ("priceDecayRate", "uint256"),
                    ("mintDustAmount", "uint256"),
                    ("priceIncrement", "uint256"),
                    ("initialPriceBips", "uint256"),
                    ("minPriceBips", "uint256"),
                    ("maxPriceBips", "uint256"),
                ),
            )
        ],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "getBureauState",
        "inputs": [],
        "outputs": [_tuple("", (("totalAuctions", "uint256"), ("lastSalePriceBips", "uint256")))],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "getAuctionState",
        "inputs": [{"name": "lpNftTokenId", "type": "uint256"}],
        "outputs": [_tuple("", _AUCTION_STATE_COMPONENTS)],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "getCurrentAuctionStates",
        "inputs": [],
        "outputs": [
            {
                "name": "",
                "type": "tuple[]",
                "components": [{"name": n, "type": t} for n, t in _AUCTION_STATE_COMPONENTS],
            }
        ],
        "stateMutability": "view",
    },
    # Routes
    _fn(
        "purchase",
        [
            ("lpNftTokenId", "uint256"),
            ("gameTokenAmount", "uint256"),
            ("assetTokenAmount", "uint256"),
            ("beneficiary", "address"),
            ("receiver", "address"),
        ],
        [],
        "nonpayable",
    ),
    _fn("exit", [("lpNftTokenId", "uint256")], [], "nonpayable"),
]
