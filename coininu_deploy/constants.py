"""Configuration constants for coininu-deploy."""

DEFAULT_CONTRACT_NAME = "CoinInu"

# Compiler pin used by the Hardhat project that produces the artifacts
SOLIDITY_VERSION = "0.8.17"

PROGRESS_MESSAGE = "Deploying smart contract..."

# Networks the deployer knows about, keyed by their Hardhat network name
NETWORK_CONFIG = {
    "scrollL2": {
        "display_name": "ScrollL2",
        "rpc_url": "https://prealpha.scroll.io/l2",
        "chain_id": 534354,
    },
    "localhost": {
        "display_name": "Localhost",
        "rpc_url": "http://127.0.0.1:8545",
        "chain_id": 31337,
    },
}

DEFAULT_NETWORK = "scrollL2"
