"""Custom exception classes for crosschain-deploy-config library."""


class ConfigurationError(Exception):
    """Base exception for configuration resolution errors."""

    pass


class UnknownNetworkError(ConfigurationError, ValueError):
    """Raised when a logical network name has no registered endpoint."""

    pass


class MissingCredentialError(ConfigurationError, ValueError):
    """Raised when an account is requested from a profile without usable secrets."""

    pass


class UnknownNamedAccountError(ConfigurationError, KeyError):
    """Raised when a named account is not declared."""

    pass


class DanglingCompanionError(ConfigurationError, ValueError):
    """Raised when a companion link targets a network missing from the configuration."""

    pass


class InvalidForkHeightError(ConfigurationError, ValueError):
    """Raised when the fork block height override is present but not a valid block number."""

    pass


class TaskLoadError(ConfigurationError, RuntimeError):
    """Raised when a task category or task module cannot be loaded."""

    pass


class RpcError(ConfigurationError, RuntimeError):
    """Raised when an RPC endpoint cannot be queried."""

    pass


class ChainIdMismatchError(ConfigurationError, ValueError):
    """Raised when an endpoint reports a chain id different from the registered one."""

    pass
