"""Data types and dataclasses for crosschain-deploy-config library."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

from .networks import Network


def _empty_mapping() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True)
class RawKey:
    """A single private key used directly as the only signer."""

    private_key: str


@dataclass(frozen=True)
class DerivedAccounts:
    """Accounts derived from a seed phrase along a BIP-44 path."""

    mnemonic: str  # May be empty; checked only when an account is used
    path: str  # Path prefix, e.g. "m/44'/60'/0'/0"
    initial_index: int
    count: int


SigningProfile = Union[RawKey, DerivedAccounts]


@dataclass(frozen=True)
class NetworkDescriptor:
    """Connection and signing profile for one logical network."""

    network: Network
    url: str  # RPC endpoint
    chain_id: int  # Always the registered value, never read from the endpoint
    accounts: SigningProfile

    # Role label -> target logical network name, resolved lazily by the runner
    companions: Mapping[str, str] = field(default_factory=_empty_mapping, hash=False)

    @property
    def name(self) -> str:
        return self.network.value


@dataclass(frozen=True)
class ForkOverlay:
    """State of a live network replayed locally up to a pinned block."""

    source: Network
    url: str
    block_number: int


@dataclass(frozen=True)
class LocalAccount:
    """Pre-funded account of the local simulation network."""

    private_key: str
    balance: str  # Wei, decimal string


@dataclass(frozen=True)
class LocalNetworkProfile:
    """Settings of the local simulation network."""

    chain_id: int
    accounts: Tuple[LocalAccount, ...]
    forking: Optional[ForkOverlay] = None
    throw_on_transaction_failures: bool = True
    throw_on_call_failures: bool = True


@dataclass(frozen=True)
class CustomChain:
    """Block explorer endpoints for a chain unknown to the verification plugin."""

    network: str
    chain_id: int
    api_url: str
    browser_url: str


@dataclass(frozen=True)
class VerificationSettings:
    """Inputs handed to the contract verification plugin."""

    api_keys: Mapping[str, str] = field(hash=False)  # Explorer network identifier -> API key
    custom_chains: Tuple[CustomChain, ...]


@dataclass(frozen=True)
class TenderlySettings:
    """Tenderly project used for simulations and forks."""

    project: str
    username: str
    fork_network: str


@dataclass(frozen=True)
class CompilerSetting:
    """One compiler version with its optimizer settings."""

    version: str
    optimizer_enabled: bool = True
    optimizer_runs: int = 200
    yul: Optional[bool] = None  # Optimizer detail, omitted when None


@dataclass(frozen=True)
class TypechainSettings:
    """Type binding generation settings."""

    out_dir: str
    target: str
