"""Signing profile resolution and account derivation."""

import logging
from functools import lru_cache
from typing import Dict, Mapping, Tuple

from eth_account import Account
from eth_account.signers.local import LocalAccount as EthLocalAccount

from .environment import MNEMONIC_ENV, PRIVATE_KEY_ENV, env_str
from .exceptions import MissingCredentialError, UnknownNamedAccountError
from .types import DerivedAccounts, LocalAccount, RawKey, SigningProfile

logger = logging.getLogger(__name__)

MNEMONIC_PATH = "m/44'/60'/0'/0"
DERIVED_ACCOUNT_COUNT = 20

# Named accounts map a role to an index into the signing profile
NAMED_ACCOUNTS: Dict[str, int] = {
    "deployer": 0,
}

# Public development mnemonic shared by local Ethereum toolchains
TEST_MNEMONIC = "test test test test test test test test test test test junk"
LOCAL_ACCOUNT_BALANCE = str(10**24)


def resolve_signing_profile(env: Mapping[str, str]) -> SigningProfile:
    """
    Select the signing profile from environment secrets.

    A non-empty PRIVATE_KEY always wins. Otherwise accounts are derived from
    MNEMONIC, which may be empty; that is accepted here and only rejected
    when an account is actually used.

    Args:
        env: Environment mapping

    Returns:
        RawKey or DerivedAccounts
    """
    private_key = env_str(env, PRIVATE_KEY_ENV)
    if private_key:
        return RawKey(private_key=private_key)

    return DerivedAccounts(
        mnemonic=env_str(env, MNEMONIC_ENV),
        path=MNEMONIC_PATH,
        initial_index=0,
        count=DERIVED_ACCOUNT_COUNT,
    )


def named_account_index(name: str) -> int:
    """
    Get the profile index assigned to a named account.

    Raises:
        UnknownNamedAccountError: If the name is not declared
    """
    try:
        return NAMED_ACCOUNTS[name]
    except KeyError as e:
        raise UnknownNamedAccountError(f"Unknown named account '{name}'") from e


def _derive(mnemonic: str, path: str) -> EthLocalAccount:
    Account.enable_unaudited_hdwallet_features()
    return Account.from_mnemonic(mnemonic, account_path=path)


def get_signer(profile: SigningProfile, index: int = 0) -> EthLocalAccount:
    """
    Materialize the signer at a profile index.

    Args:
        profile: Signing profile
        index: Account index (0 is the deployer)

    Returns:
        eth_account LocalAccount

    Raises:
        MissingCredentialError: If the profile has no seed phrase to derive from
        IndexError: If the index is outside the profile
    """
    if isinstance(profile, RawKey):
        if index != 0:
            raise IndexError(f"Raw key profile has a single account, got index {index}")
        return Account.from_key(profile.private_key)

    if not 0 <= index < profile.count:
        raise IndexError(
            f"Account index {index} outside derived range 0..{profile.count - 1}"
        )
    if not profile.mnemonic:
        raise MissingCredentialError(
            f"Cannot derive account {index}: set {PRIVATE_KEY_ENV} or {MNEMONIC_ENV}"
        )
    return _derive(profile.mnemonic, f"{profile.path}/{profile.initial_index + index}")


def get_account_address(profile: SigningProfile, index: int = 0) -> str:
    """Get the checksum address of the signer at a profile index."""
    return get_signer(profile, index).address


def get_named_account_address(profile: SigningProfile, name: str) -> str:
    """Get the checksum address of a named account (e.g. "deployer")."""
    return get_account_address(profile, named_account_index(name))


@lru_cache(maxsize=None)
def local_accounts(count: int = DERIVED_ACCOUNT_COUNT) -> Tuple[LocalAccount, ...]:
    """
    Pre-funded accounts for the local simulation network.

    Derived from the public development mnemonic, so addresses match the
    ones local node tooling prints by default.
    """
    result = []
    for i in range(count):
        acct = _derive(TEST_MNEMONIC, f"{MNEMONIC_PATH}/{i}")
        # HexBytes.hex() omits the 0x prefix in recent releases
        result.append(LocalAccount(private_key="0x" + bytes(acct.key).hex(), balance=LOCAL_ACCOUNT_BALANCE))
    return tuple(result)
