"""Environment variable access for crosschain-deploy-config library."""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional, Union

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

# Variable names read by the resolver
PRIVATE_KEY_ENV = "PRIVATE_KEY"
MNEMONIC_ENV = "MNEMONIC"
MAINNET_FORK_ENV = "MAINNET_FORK"
FORKING_BLOCK_NUMBER_ENV = "FORKING_BLOCK_NUMBER"
SKIP_LOAD_ENV = "SKIP_LOAD"
REPORT_GAS_ENV = "REPORT_GAS"
ETHERSCAN_KEY_ENV = "ETHERSCAN_KEY"
ARBISCAN_KEY_ENV = "ARBISCAN_KEY"
OPTIMISTIC_ETHERSCAN_KEY_ENV = "OPTIMISTIC_ETHERSCAN_KEY"
TENDERLY_PROJECT_ENV = "TENDERLY_PROJECT"
TENDERLY_USERNAME_ENV = "TENDERLY_USERNAME"
TENDERLY_FORK_ID_ENV = "TENDERLY_FORK_ID"
ALCHEMY_KEY_ENV = "ALCHEMY_KEY"
INFURA_KEY_ENV = "INFURA_KEY"


def load_environment(env_file: Optional[Union[Path, str]] = None) -> bool:
    """
    Prime ``os.environ`` from a ``.env`` file.

    Variables already present in the process environment win over the file.

    Args:
        env_file: Path to the dotenv file (defaults to the nearest ``.env``
                  in the current directory or its parents)

    Returns:
        True if at least one variable was loaded from the file
    """
    if env_file is None:
        env_file = find_dotenv(usecwd=True)
    loaded = load_dotenv(dotenv_path=env_file, override=False)
    if loaded:
        logger.debug("Loaded environment from %s", env_file or ".env")
    return loaded


def resolve_env(env: Optional[Mapping[str, str]] = None) -> Mapping[str, str]:
    """Return the given mapping, or the process environment when None."""
    if env is None:
        return os.environ
    return env


def env_str(env: Mapping[str, str], name: str, default: str = "") -> str:
    """
    Read a string variable, treating unset and empty alike.

    Args:
        env: Environment mapping
        name: Variable name
        default: Value returned when the variable is unset or empty

    Returns:
        Variable value or default
    """
    value = env.get(name)
    if not value:
        return default
    return value


def env_flag(env: Mapping[str, str], name: str) -> bool:
    """
    Read a strict boolean flag.

    Only the literal string ``"true"`` enables the flag; anything else,
    including ``"1"`` or ``"TRUE"``, leaves it disabled.
    """
    return env.get(name) == "true"


def env_present(env: Mapping[str, str], name: str) -> bool:
    """Check whether a variable is set to a non-empty value."""
    return bool(env.get(name))
