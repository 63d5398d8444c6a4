"""Supported networks and their static endpoint registry."""

from enum import Enum
from string import Formatter
from typing import Any, Dict, List, Mapping, Union

from .environment import env_str
from .exceptions import UnknownNetworkError


class Network(Enum):
    """
    Logical networks a deployment can target.

    Value strings are the logical names used on the command line and as
    companion-link targets.
    """

    MAIN = "main"
    SEPOLIA = "sepolia"
    GOERLI = "goerli"
    TENDERLY_MAIN = "tenderlyMain"
    MATIC = "matic"
    MUMBAI = "mumbai"
    XDAI = "xdai"
    ARBITRUM = "arbitrum"
    ARBITRUM_TESTNET = "arbitrum-testnet"
    OPTIMISM = "optimism"
    OPTIMISM_TESTNET = "optimism-testnet"
    LISK = "lisk"
    LISK_SEPOLIA = "lisk-sepolia"
    HARDHAT = "hardhat"


# Static per-network registry.
# rpc_url may hold {VARIABLE} placeholders filled from the environment; when
# any placeholder of rpc_url is unset, fallback_rpc_url is used instead.
# rpc_env names the variable that overrides the endpoint entirely.
NETWORK_CONFIG: Dict[Network, Dict[str, Any]] = {
    Network.MAIN: {
        "chain_id": 1,
        "chain_name": "Ethereum Mainnet",
        "rpc_url": "https://eth-mainnet.alchemyapi.io/v2/{ALCHEMY_KEY}",
        "fallback_rpc_url": "https://mainnet.infura.io/v3/{INFURA_KEY}",
        "rpc_env": "MAIN_RPC_URL",
    },
    Network.SEPOLIA: {
        "chain_id": 11155111,
        "chain_name": "Sepolia",
        "rpc_url": "https://eth-sepolia.g.alchemy.com/v2/{ALCHEMY_KEY}",
        "fallback_rpc_url": "https://sepolia.infura.io/v3/{INFURA_KEY}",
        "rpc_env": "SEPOLIA_RPC_URL",
    },
    Network.GOERLI: {
        "chain_id": 5,
        "chain_name": "Goerli",
        "rpc_url": "https://eth-goerli.alchemyapi.io/v2/{ALCHEMY_KEY}",
        "fallback_rpc_url": "https://goerli.infura.io/v3/{INFURA_KEY}",
        "rpc_env": "GOERLI_RPC_URL",
    },
    Network.TENDERLY_MAIN: {
        # Tenderly forks report the chain id they were configured with
        "chain_id": 5,
        "chain_name": "Tenderly Fork",
        "rpc_url": "https://rpc.tenderly.co/fork/{TENDERLY_FORK_ID}",
        "rpc_env": "TENDERLY_MAIN_RPC_URL",
    },
    Network.MATIC: {
        "chain_id": 137,
        "chain_name": "Polygon",
        "rpc_url": "https://polygon-rpc.com",
        "rpc_env": "MATIC_RPC_URL",
    },
    Network.MUMBAI: {
        "chain_id": 80001,
        "chain_name": "Polygon Mumbai",
        "rpc_url": "https://rpc-mumbai.maticvigil.com",
        "rpc_env": "MUMBAI_RPC_URL",
    },
    Network.XDAI: {
        "chain_id": 100,
        "chain_name": "Gnosis Chain",
        "rpc_url": "https://rpc.gnosischain.com",
        "rpc_env": "XDAI_RPC_URL",
    },
    Network.ARBITRUM: {
        "chain_id": 42161,
        "chain_name": "Arbitrum One",
        "rpc_url": "https://arb1.arbitrum.io/rpc",
        "rpc_env": "ARBITRUM_RPC_URL",
    },
    Network.ARBITRUM_TESTNET: {
        "chain_id": 421611,
        "chain_name": "Arbitrum Testnet",
        "rpc_url": "https://rinkeby.arbitrum.io/rpc",
        "rpc_env": "ARBITRUM_TESTNET_RPC_URL",
    },
    Network.OPTIMISM: {
        "chain_id": 10,
        "chain_name": "OP Mainnet",
        "rpc_url": "https://mainnet.optimism.io",
        "rpc_env": "OPTIMISM_RPC_URL",
    },
    Network.OPTIMISM_TESTNET: {
        "chain_id": 11155420,
        "chain_name": "OP Sepolia",
        "rpc_url": "https://sepolia.optimism.io",
        "rpc_env": "OPTIMISM_TESTNET_RPC_URL",
    },
    Network.LISK: {
        "chain_id": 1135,
        "chain_name": "Lisk",
        "rpc_url": "https://rpc.api.lisk.com",
        "rpc_env": "LISK_RPC_URL",
    },
    Network.LISK_SEPOLIA: {
        "chain_id": 4202,
        "chain_name": "Lisk Sepolia",
        "rpc_url": "https://rpc.sepolia-api.lisk.com",
        "rpc_env": "LISK_SEPOLIA_RPC_URL",
    },
    Network.HARDHAT: {
        "chain_id": 31337,
        "chain_name": "Hardhat",
        "rpc_url": "http://localhost:8545",
        "rpc_env": "HARDHAT_RPC_URL",
        "local": True,
    },
}

# Networks that receive a NetworkDescriptor; the local simulation network
# gets a LocalNetworkProfile instead
REMOTE_NETWORKS: List[Network] = [
    network for network in Network if not NETWORK_CONFIG[network].get("local", False)
]

# Companion links declared per network (role -> target logical network)
COMPANION_LINKS: Dict[Network, Dict[str, Network]] = {
    Network.SEPOLIA: {
        "optimism": Network.OPTIMISM_TESTNET,
        "arbitrum": Network.ARBITRUM_TESTNET,
        "lisk": Network.LISK_SEPOLIA,
    },
    Network.MAIN: {
        "optimism": Network.OPTIMISM,
        "arbitrum": Network.ARBITRUM,
        "lisk": Network.LISK,
    },
    Network.ARBITRUM_TESTNET: {"l1": Network.SEPOLIA},
    Network.OPTIMISM_TESTNET: {"l1": Network.SEPOLIA},
    Network.LISK_SEPOLIA: {"l1": Network.SEPOLIA},
}


def parse_network(name: Union[Network, str]) -> Network:
    """
    Convert a logical network name to a Network member.

    Args:
        name: Logical name (e.g. "main", "arbitrum-testnet") or a Network

    Returns:
        Matching Network member

    Raises:
        UnknownNetworkError: If the name is not a supported network
    """
    if isinstance(name, Network):
        return name
    try:
        return Network(name)
    except ValueError as e:
        supported = ", ".join(n.value for n in Network)
        raise UnknownNetworkError(
            f"Unknown network '{name}'. Supported: {supported}"
        ) from e


def get_network_config(network: Union[Network, str]) -> Dict[str, Any]:
    """
    Get the static registry entry for a network.

    Raises:
        UnknownNetworkError: If the network has no registry entry
    """
    network = parse_network(network)
    if network not in NETWORK_CONFIG:
        raise UnknownNetworkError(f"No RPC endpoint registered for network '{network.value}'")
    return NETWORK_CONFIG[network]


def get_chain_id(network: Union[Network, str]) -> int:
    """Get the registered chain id for a network."""
    return get_network_config(network)["chain_id"]


def _template_fields(template: str) -> List[str]:
    return [field for _, field, _, _ in Formatter().parse(template) if field]


def _fill_template(template: str, env: Mapping[str, str]) -> str:
    return template.format(**{field: env_str(env, field) for field in _template_fields(template)})


def get_rpc_url(network: Union[Network, str], env: Mapping[str, str]) -> str:
    """
    Resolve the RPC endpoint for a network.

    Precedence: the network's override variable, then the primary template
    when all its placeholders are set, then the fallback template.

    Args:
        network: Logical network
        env: Environment mapping

    Returns:
        RPC endpoint URL

    Raises:
        UnknownNetworkError: If the network has no registry entry
    """
    config = get_network_config(network)

    override = env_str(env, config["rpc_env"])
    if override:
        return override

    template = config["rpc_url"]
    fallback = config.get("fallback_rpc_url")
    if fallback is not None and not all(env_str(env, f) for f in _template_fields(template)):
        template = fallback

    return _fill_template(template, env)
