"""Settings passed through to compiler and tooling plugins."""

from typing import Mapping, Tuple

from .environment import REPORT_GAS_ENV, env_present
from .types import CompilerSetting, TypechainSettings

COMPILERS: Tuple[CompilerSetting, ...] = (
    CompilerSetting(version="0.8.10"),
    CompilerSetting(version="0.7.5", yul=True),
    CompilerSetting(version="0.7.3"),
    CompilerSetting(version="0.5.2"),
)

# Sources compiled from dependencies so their artifacts are available to tasks
DEPENDENCY_COMPILER_PATHS: Tuple[str, ...] = (
    "@aave/governance-v2/contracts/governance/AaveGovernanceV2.sol",
    "@aave/governance-v2/contracts/governance/Executor.sol",
)

TYPECHAIN = TypechainSettings(out_dir="typechain", target="ethers-v5")

MOCHA_TIMEOUT_MS = 100000


def gas_reporter_enabled(env: Mapping[str, str]) -> bool:
    """Gas reporting is on whenever REPORT_GAS is set to any non-empty value."""
    return env_present(env, REPORT_GAS_ENV)
