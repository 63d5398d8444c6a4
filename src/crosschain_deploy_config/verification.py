"""Block explorer verification and Tenderly settings."""

from types import MappingProxyType
from typing import Mapping, Tuple

from .environment import (
    ARBISCAN_KEY_ENV,
    ETHERSCAN_KEY_ENV,
    OPTIMISTIC_ETHERSCAN_KEY_ENV,
    TENDERLY_PROJECT_ENV,
    TENDERLY_USERNAME_ENV,
    env_str,
)
from .types import CustomChain, TenderlySettings, VerificationSettings

# Explorer network identifier -> environment variable holding its API key
API_KEY_ENVS = {
    "optimisticEthereum": OPTIMISTIC_ETHERSCAN_KEY_ENV,
    "arbitrumOne": ARBISCAN_KEY_ENV,
    "optimisticSepolia": OPTIMISTIC_ETHERSCAN_KEY_ENV,
    "lisk-sepolia": ETHERSCAN_KEY_ENV,
    "lisk": ETHERSCAN_KEY_ENV,
}

CUSTOM_CHAINS: Tuple[CustomChain, ...] = (
    CustomChain(
        network="sepolia",
        chain_id=11155111,
        api_url="https://api-sepolia.etherscan.io/api",
        browser_url="https://sepolia.etherscan.io",
    ),
    CustomChain(
        network="optimisticSepolia",
        chain_id=11155420,
        api_url="https://api-sepolia-optimism.etherscan.io/api",
        browser_url="https://sepolia-optimism.etherscan.io",
    ),
    CustomChain(
        network="lisk",
        chain_id=1135,
        api_url="https://blockscout.lisk.com/api",
        browser_url="https://blockscout.lisk.com",
    ),
    CustomChain(
        network="lisk-sepolia",
        chain_id=4202,
        api_url="https://sepolia-blockscout.lisk.com/api",
        browser_url="https://sepolia-blockscout.lisk.com",
    ),
)

TENDERLY_FORK_NETWORK = "137"


def build_api_key_registry(env: Mapping[str, str]) -> Mapping[str, str]:
    """
    Map explorer network identifiers to API keys.

    Missing keys resolve to empty strings; the verification plugin reports
    them when it is actually used.
    """
    return MappingProxyType(
        {network: env_str(env, variable) for network, variable in API_KEY_ENVS.items()}
    )


def build_verification_settings(env: Mapping[str, str]) -> VerificationSettings:
    """Build the API key registry together with the custom explorer chains."""
    return VerificationSettings(
        api_keys=build_api_key_registry(env),
        custom_chains=CUSTOM_CHAINS,
    )


def build_tenderly_settings(env: Mapping[str, str]) -> TenderlySettings:
    return TenderlySettings(
        project=env_str(env, TENDERLY_PROJECT_ENV),
        username=env_str(env, TENDERLY_USERNAME_ENV),
        fork_network=TENDERLY_FORK_NETWORK,
    )
