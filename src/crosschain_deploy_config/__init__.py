"""
crosschain-deploy-config: network and signing configuration for multi-chain contract deployments
"""

from importlib.metadata import PackageNotFoundError, version

from .accounts import get_account_address, get_named_account_address, resolve_signing_profile
from .config import DeploymentConfig, build_config
from .descriptors import attach_companions, build_descriptor, validate_companions
from .environment import load_environment
from .exceptions import (
    ChainIdMismatchError,
    ConfigurationError,
    DanglingCompanionError,
    InvalidForkHeightError,
    MissingCredentialError,
    RpcError,
    TaskLoadError,
    UnknownNamedAccountError,
    UnknownNetworkError,
)
from .fork import build_fork_overlay
from .networks import Network, parse_network
from .tasks import load_tasks, load_tasks_from_env, task
from .types import DerivedAccounts, ForkOverlay, NetworkDescriptor, RawKey

try:
    __version__ = version("crosschain-deploy-config")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "build_config",
    "DeploymentConfig",
    "build_descriptor",
    "attach_companions",
    "validate_companions",
    "build_fork_overlay",
    "resolve_signing_profile",
    "get_account_address",
    "get_named_account_address",
    "load_environment",
    "load_tasks",
    "load_tasks_from_env",
    "task",
    "Network",
    "parse_network",
    "NetworkDescriptor",
    "RawKey",
    "DerivedAccounts",
    "ForkOverlay",
    "ConfigurationError",
    "UnknownNetworkError",
    "MissingCredentialError",
    "UnknownNamedAccountError",
    "DanglingCompanionError",
    "InvalidForkHeightError",
    "TaskLoadError",
    "RpcError",
    "ChainIdMismatchError",
]
