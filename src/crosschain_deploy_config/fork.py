"""Mainnet fork overlay and local simulation network settings."""

import logging
import re
from typing import Mapping, Optional

from .accounts import local_accounts
from .environment import FORKING_BLOCK_NUMBER_ENV, MAINNET_FORK_ENV, env_flag
from .exceptions import InvalidForkHeightError
from .networks import Network, get_chain_id, get_rpc_url
from .types import ForkOverlay, LocalNetworkProfile

logger = logging.getLogger(__name__)

FORK_SOURCE_NETWORK = Network.MAIN
DEFAULT_FORKING_BLOCK_NUMBER = 14340480

_BLOCK_NUMBER_PATTERN = re.compile(r"[0-9]+")


def parse_fork_block_number(value: Optional[str]) -> int:
    """
    Parse the fork block height override.

    Args:
        value: Raw variable value; None or empty means not provided

    Returns:
        Block number, or DEFAULT_FORKING_BLOCK_NUMBER when not provided

    Raises:
        InvalidForkHeightError: If the value is provided but not a
                                non-negative decimal integer
    """
    if not value:
        return DEFAULT_FORKING_BLOCK_NUMBER

    if not _BLOCK_NUMBER_PATTERN.fullmatch(value.strip()):
        raise InvalidForkHeightError(
            f"{FORKING_BLOCK_NUMBER_ENV} must be a non-negative decimal block number, got '{value}'"
        )
    return int(value.strip())


def build_fork_overlay(env: Mapping[str, str]) -> Optional[ForkOverlay]:
    """
    Build the mainnet fork overlay if forking is enabled.

    Forking is enabled only by MAINNET_FORK=true. A block height override
    without the flag is ignored.

    Args:
        env: Environment mapping

    Returns:
        ForkOverlay, or None when forking is disabled

    Raises:
        InvalidForkHeightError: If FORKING_BLOCK_NUMBER is set but invalid
    """
    if not env_flag(env, MAINNET_FORK_ENV):
        return None

    block_number = parse_fork_block_number(env.get(FORKING_BLOCK_NUMBER_ENV))
    logger.warning(
        "Forking network '%s' at block %d", FORK_SOURCE_NETWORK.value, block_number
    )
    return ForkOverlay(
        source=FORK_SOURCE_NETWORK,
        url=get_rpc_url(FORK_SOURCE_NETWORK, env),
        block_number=block_number,
    )


def build_local_network(forking: Optional[ForkOverlay] = None) -> LocalNetworkProfile:
    """
    Build the local simulation network profile.

    Without an overlay the local network starts as a fresh chain.
    """
    return LocalNetworkProfile(
        chain_id=get_chain_id(Network.HARDHAT),
        accounts=local_accounts(),
        forking=forking,
    )
