"""Unit tests for verification, Tenderly and compiler settings."""

import pytest

from crosschain_deploy_config.compilers import (
    COMPILERS,
    DEPENDENCY_COMPILER_PATHS,
    gas_reporter_enabled,
)
from crosschain_deploy_config.verification import (
    build_api_key_registry,
    build_tenderly_settings,
    build_verification_settings,
)


class TestApiKeyRegistry:
    """Test the build_api_key_registry function."""

    def test_maps_keys_to_explorer_networks(self):
        """Test that each explorer network gets its key."""
        env = {
            "ETHERSCAN_KEY": "eth",
            "ARBISCAN_KEY": "arb",
            "OPTIMISTIC_ETHERSCAN_KEY": "op",
        }

        assert dict(build_api_key_registry(env)) == {
            "optimisticEthereum": "op",
            "arbitrumOne": "arb",
            "optimisticSepolia": "op",
            "lisk-sepolia": "eth",
            "lisk": "eth",
        }

    def test_missing_keys_are_empty(self, empty_env):
        """Test that missing keys resolve to empty strings."""
        registry = build_api_key_registry(empty_env)

        assert set(registry.values()) == {""}

    def test_registry_is_read_only(self, empty_env):
        """Test that the registry cannot be modified."""
        registry = build_api_key_registry(empty_env)

        with pytest.raises(TypeError):
            registry["lisk"] = "other"


class TestVerificationSettings:
    """Test custom explorer chains."""

    def test_custom_chains(self, empty_env):
        """Test the declared custom chains."""
        chains = {c.network: c for c in build_verification_settings(empty_env).custom_chains}

        assert set(chains) == {"sepolia", "optimisticSepolia", "lisk", "lisk-sepolia"}
        assert chains["lisk"].chain_id == 1135
        assert chains["lisk"].api_url == "https://blockscout.lisk.com/api"
        assert chains["optimisticSepolia"].browser_url == "https://sepolia-optimism.etherscan.io"

    def test_settings_are_hashable(self, empty_env):
        """Test that verification settings can be hashed despite the read-only key mapping."""
        settings = build_verification_settings(empty_env)

        assert hash(settings) == hash(build_verification_settings(empty_env))


class TestTenderlySettings:
    """Test Tenderly project settings."""

    def test_reads_project_and_username(self):
        """Test values taken from the environment."""
        settings = build_tenderly_settings({"TENDERLY_PROJECT": "p", "TENDERLY_USERNAME": "u"})

        assert settings.project == "p"
        assert settings.username == "u"
        assert settings.fork_network == "137"


class TestCompilerSettings:
    """Test pass-through compiler and tooling settings."""

    def test_compiler_versions_in_order(self):
        """Test the compiler list order."""
        assert [c.version for c in COMPILERS] == ["0.8.10", "0.7.5", "0.7.3", "0.5.2"]

    def test_optimizer_settings(self):
        """Test that every compiler optimizes with 200 runs."""
        assert all(c.optimizer_enabled and c.optimizer_runs == 200 for c in COMPILERS)
        assert [c.version for c in COMPILERS if c.yul] == ["0.7.5"]

    def test_dependency_paths(self):
        """Test the governance sources compiled from dependencies."""
        assert len(DEPENDENCY_COMPILER_PATHS) == 2
        assert all(p.startswith("@aave/governance-v2/") for p in DEPENDENCY_COMPILER_PATHS)

    @pytest.mark.parametrize("value,expected", [("1", True), ("false", True), ("", False)])
    def test_gas_reporter_flag(self, value: str, expected: bool):
        """Test that any non-empty REPORT_GAS enables gas reporting."""
        assert gas_reporter_enabled({"REPORT_GAS": value}) is expected

    def test_gas_reporter_unset(self, empty_env):
        """Test that gas reporting is off by default."""
        assert gas_reporter_enabled(empty_env) is False
