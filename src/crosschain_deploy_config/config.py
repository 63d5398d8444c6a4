"""Assembly of the complete deployment configuration."""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .accounts import NAMED_ACCOUNTS, get_named_account_address
from .compilers import (
    COMPILERS,
    DEPENDENCY_COMPILER_PATHS,
    MOCHA_TIMEOUT_MS,
    TYPECHAIN,
    gas_reporter_enabled,
)
from .descriptors import (
    attach_companions,
    build_descriptor,
    companion_graph,
    resolve_companion,
    validate_companions,
)
from .environment import MNEMONIC_ENV, PRIVATE_KEY_ENV, resolve_env
from .exceptions import UnknownNetworkError
from .fork import build_fork_overlay, build_local_network
from .networks import COMPANION_LINKS, REMOTE_NETWORKS, Network, parse_network
from .types import (
    CompilerSetting,
    DerivedAccounts,
    ForkOverlay,
    LocalNetworkProfile,
    NetworkDescriptor,
    SigningProfile,
    TenderlySettings,
    TypechainSettings,
    VerificationSettings,
)
from .verification import build_tenderly_settings, build_verification_settings

logger = logging.getLogger(__name__)

REDACTED = "***"


@dataclass(frozen=True)
class DeploymentConfig:
    """Fully resolved configuration handed to the task runner and its plugins."""

    networks: Mapping[Network, NetworkDescriptor]
    local: LocalNetworkProfile
    fork: Optional[ForkOverlay]
    named_accounts: Mapping[str, int]
    verification: VerificationSettings
    tenderly: TenderlySettings
    compilers: Tuple[CompilerSetting, ...]
    dependency_compiler_paths: Tuple[str, ...]
    typechain: TypechainSettings
    gas_reporter_enabled: bool
    mocha_timeout_ms: int

    def has_network(self, network: Union[Network, str]) -> bool:
        """
        Check if a network has a descriptor.

        Args:
            network: Logical network name or member

        Returns:
            True if configured, False otherwise (including unknown names)
        """
        try:
            return parse_network(network) in self.networks
        except UnknownNetworkError:
            return False

    def network_names(self) -> List[str]:
        return [network.value for network in self.networks]

    def descriptor(self, network: Union[Network, str]) -> NetworkDescriptor:
        """
        Get the descriptor of a network.

        Raises:
            UnknownNetworkError: If the network is unknown or not configured
        """
        network = parse_network(network)
        if network is Network.HARDHAT:
            raise UnknownNetworkError(
                "Network 'hardhat' is the local simulation network and has no remote descriptor"
            )
        if network not in self.networks:
            raise UnknownNetworkError(f"Network '{network.value}' is not configured")
        return self.networks[network]

    def companion(self, network: Union[Network, str], role: str) -> NetworkDescriptor:
        """Follow a companion link of a network (e.g. role "l1")."""
        self.descriptor(network)
        return resolve_companion(self.networks, network, role)

    def companion_graph(self) -> Dict[str, Dict[str, str]]:
        return companion_graph(self.networks)

    def named_account_address(self, network: Union[Network, str], name: str = "deployer") -> str:
        """
        Address a named account signs with on a network.

        Raises:
            MissingCredentialError: If no secret is configured to derive from
        """
        return get_named_account_address(self.descriptor(network).accounts, name)

    def network_to_dict(self, network: Union[Network, str], redact_secrets: bool = True) -> Dict[str, Any]:
        """
        Render a single network entry, including the local simulation network.

        Raises:
            UnknownNetworkError: If the network is unknown or not configured
        """
        if parse_network(network) is Network.HARDHAT:
            return _local_to_dict(self.local)
        return descriptor_to_dict(self.descriptor(network), redact_secrets)

    def to_dict(self, redact_secrets: bool = True) -> Dict[str, Any]:
        """
        Render the configuration in the task runner's vocabulary.

        Args:
            redact_secrets: Replace private keys, seed phrases and API keys
                            with "***"

        Returns:
            JSON-serializable dictionary
        """
        networks: Dict[str, Any] = {
            network.value: descriptor_to_dict(descriptor, redact_secrets)
            for network, descriptor in self.networks.items()
        }
        networks[Network.HARDHAT.value] = _local_to_dict(self.local)

        return {
            "namedAccounts": dict(self.named_accounts),
            "networks": networks,
            "etherscan": {
                "apiKey": {
                    network: _secret(key, redact_secrets)
                    for network, key in self.verification.api_keys.items()
                },
                "customChains": [
                    {
                        "network": chain.network,
                        "chainId": chain.chain_id,
                        "urls": {"apiURL": chain.api_url, "browserURL": chain.browser_url},
                    }
                    for chain in self.verification.custom_chains
                ],
            },
            "tenderly": {
                "project": self.tenderly.project,
                "username": self.tenderly.username,
                "forkNetwork": self.tenderly.fork_network,
            },
            "solidity": {"compilers": [_compiler_to_dict(c) for c in self.compilers]},
            "typechain": {"outDir": self.typechain.out_dir, "target": self.typechain.target},
            "gasReporter": {"enabled": self.gas_reporter_enabled},
            "mocha": {"timeout": self.mocha_timeout_ms},
            "dependencyCompiler": {"paths": list(self.dependency_compiler_paths)},
        }


def _secret(value: str, redact: bool) -> str:
    # Empty values are not redacted
    if redact and value:
        return REDACTED
    return value


def _accounts_to_dict(profile: SigningProfile, redact: bool) -> Any:
    if isinstance(profile, DerivedAccounts):
        return {
            "mnemonic": _secret(profile.mnemonic, redact),
            "path": profile.path,
            "initialIndex": profile.initial_index,
            "count": profile.count,
        }
    return [_secret(profile.private_key, redact)]


def descriptor_to_dict(descriptor: NetworkDescriptor, redact: bool) -> Dict[str, Any]:
    result: Dict[str, Any] = {
        "url": descriptor.url,
        "chainId": descriptor.chain_id,
        "accounts": _accounts_to_dict(descriptor.accounts, redact),
    }
    if descriptor.companions:
        result["companionNetworks"] = dict(descriptor.companions)
    return result


def _local_to_dict(local: LocalNetworkProfile) -> Dict[str, Any]:
    result: Dict[str, Any] = {
        "chainId": local.chain_id,
        "accounts": [
            {"privateKey": account.private_key, "balance": account.balance}
            for account in local.accounts
        ],
        "throwOnTransactionFailures": local.throw_on_transaction_failures,
        "throwOnCallFailures": local.throw_on_call_failures,
    }
    if local.forking is not None:
        result["forking"] = {
            "url": local.forking.url,
            "blockNumber": local.forking.block_number,
        }
    return result


def _compiler_to_dict(compiler: CompilerSetting) -> Dict[str, Any]:
    optimizer: Dict[str, Any] = {
        "enabled": compiler.optimizer_enabled,
        "runs": compiler.optimizer_runs,
    }
    if compiler.yul is not None:
        optimizer["details"] = {"yul": compiler.yul}
    return {"version": compiler.version, "settings": {"optimizer": optimizer}}


def build_config(
    env: Optional[Mapping[str, str]] = None,
    validate_companion_links: bool = True,
) -> DeploymentConfig:
    """
    Resolve the complete configuration from the environment.

    Builds one descriptor per remote network, attaches the declared
    companion links, and prepares the local network with the optional
    mainnet fork. Nothing partial is returned: any error aborts assembly.

    Args:
        env: Environment mapping (defaults to os.environ)
        validate_companion_links: Fail on companion links to unconfigured
                                  networks instead of leaving them to be
                                  resolved on first use

    Returns:
        DeploymentConfig

    Raises:
        UnknownNetworkError: If a network has no registered endpoint
        DanglingCompanionError: If validation is on and a link dangles
        InvalidForkHeightError: If the fork block override is invalid
    """
    env = resolve_env(env)

    descriptors: Dict[Network, NetworkDescriptor] = {}
    for network in REMOTE_NETWORKS:
        descriptor = build_descriptor(network, env)
        links = COMPANION_LINKS.get(network)
        if links:
            descriptor = attach_companions(descriptor, links)
        descriptors[network] = descriptor

    if validate_companion_links:
        validate_companions(descriptors)
    else:
        logger.warning("Companion link validation disabled; dangling links surface on first use")

    if not env.get(PRIVATE_KEY_ENV) and not env.get(MNEMONIC_ENV):
        logger.warning(
            "Neither %s nor %s is set; remote networks cannot sign transactions",
            PRIVATE_KEY_ENV,
            MNEMONIC_ENV,
        )

    fork = build_fork_overlay(env)

    return DeploymentConfig(
        networks=MappingProxyType(descriptors),
        local=build_local_network(fork),
        fork=fork,
        named_accounts=MappingProxyType(dict(NAMED_ACCOUNTS)),
        verification=build_verification_settings(env),
        tenderly=build_tenderly_settings(env),
        compilers=COMPILERS,
        dependency_compiler_paths=DEPENDENCY_COMPILER_PATHS,
        typechain=TYPECHAIN,
        gas_reporter_enabled=gas_reporter_enabled(env),
        mocha_timeout_ms=MOCHA_TIMEOUT_MS,
    )
