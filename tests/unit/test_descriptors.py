"""Unit tests for descriptor building and companion links."""

from dataclasses import FrozenInstanceError

import pytest

from crosschain_deploy_config.descriptors import (
    attach_companions,
    build_descriptor,
    companion_graph,
    find_dangling_companions,
    resolve_companion,
    validate_companions,
)
from crosschain_deploy_config.exceptions import (
    ChainIdMismatchError,
    DanglingCompanionError,
    UnknownNetworkError,
)
from crosschain_deploy_config.networks import NETWORK_CONFIG, REMOTE_NETWORKS, Network
from crosschain_deploy_config.types import DerivedAccounts, RawKey


class TestBuildDescriptor:
    """Test the build_descriptor function."""

    def test_chain_id_matches_registry_for_all_networks(self, private_key_env, empty_env):
        """Test that chain ids are the registered ones regardless of environment."""
        for env in (private_key_env, empty_env, {"MAIN_RPC_URL": "http://localhost:1"}):
            for network in REMOTE_NETWORKS:
                descriptor = build_descriptor(network, env)
                assert descriptor.chain_id == NETWORK_CONFIG[network]["chain_id"]

    def test_accepts_logical_name(self, mnemonic_env):
        """Test that string names are accepted."""
        descriptor = build_descriptor("optimism", mnemonic_env)

        assert descriptor.network is Network.OPTIMISM
        assert descriptor.name == "optimism"
        assert descriptor.url == "https://mainnet.optimism.io"

    def test_raw_key_for_every_network(self):
        """Test that raw key precedence holds on every network."""
        env = {"PRIVATE_KEY": "0xabc", "MNEMONIC": "ignored words"}

        for network in REMOTE_NETWORKS:
            assert build_descriptor(network, env).accounts == RawKey(private_key="0xabc")

    def test_matching_explicit_chain_id(self, mnemonic_env):
        """Test that passing the registered chain id is accepted."""
        descriptor = build_descriptor(Network.LISK, mnemonic_env, chain_id=1135)
        assert descriptor.chain_id == 1135

    def test_mismatched_explicit_chain_id(self, mnemonic_env):
        """Test that a chain id disagreeing with the registry raises."""
        with pytest.raises(ChainIdMismatchError):
            build_descriptor(Network.LISK, mnemonic_env, chain_id=4202)

    def test_unknown_network(self, mnemonic_env):
        """Test that unknown names fail at build time."""
        with pytest.raises(UnknownNetworkError):
            build_descriptor("fantom", mnemonic_env)

    def test_unregistered_endpoint(self, mnemonic_env, monkeypatch):
        """Test that a network without a table entry fails at build time."""
        monkeypatch.delitem(NETWORK_CONFIG, Network.XDAI)

        with pytest.raises(UnknownNetworkError):
            build_descriptor(Network.XDAI, mnemonic_env)

    def test_descriptors_do_not_share_state(self, mnemonic_env):
        """Test that descriptors for different networks are independent."""
        main = build_descriptor(Network.MAIN, mnemonic_env)
        optimism = build_descriptor(Network.OPTIMISM, mnemonic_env)

        assert main.accounts == optimism.accounts
        assert isinstance(main.accounts, DerivedAccounts)

        linked = attach_companions(main, {"optimism": Network.OPTIMISM})
        assert dict(optimism.companions) == {}
        assert dict(main.companions) == {}
        assert dict(linked.companions) == {"optimism": "optimism"}

    def test_descriptor_is_frozen(self, mnemonic_env):
        """Test that descriptors cannot be mutated."""
        descriptor = build_descriptor(Network.MAIN, mnemonic_env)

        with pytest.raises(FrozenInstanceError):
            descriptor.url = "http://elsewhere"
        with pytest.raises(TypeError):
            descriptor.companions["l1"] = "main"


class TestAttachCompanions:
    """Test the attach_companions function."""

    def test_stores_logical_names(self, mnemonic_env):
        """Test that targets are stored as logical names."""
        descriptor = attach_companions(
            build_descriptor(Network.OPTIMISM_TESTNET, mnemonic_env), {"l1": Network.SEPOLIA}
        )

        assert dict(descriptor.companions) == {"l1": "sepolia"}

    def test_idempotent(self, mnemonic_env):
        """Test that attaching the same links twice changes nothing."""
        links = {"optimism": Network.OPTIMISM, "arbitrum": "arbitrum"}
        once = attach_companions(build_descriptor(Network.MAIN, mnemonic_env), links)
        twice = attach_companions(once, links)

        assert once == twice
        assert dict(once.companions) == dict(twice.companions)

    def test_does_not_validate_targets(self, mnemonic_env):
        """Test that unknown targets are accepted at attachment time."""
        descriptor = attach_companions(
            build_descriptor(Network.MAIN, mnemonic_env), {"zk": "zksync"}
        )

        assert descriptor.companions["zk"] == "zksync"

    def test_merges_over_existing_links(self, mnemonic_env):
        """Test that new links are merged with existing ones."""
        descriptor = attach_companions(build_descriptor(Network.MAIN, mnemonic_env), {"a": "xdai"})
        descriptor = attach_companions(descriptor, {"b": "matic", "a": "lisk"})

        assert dict(descriptor.companions) == {"a": "lisk", "b": "matic"}

    def test_descriptors_are_hashable(self, mnemonic_env):
        """Test that descriptors with companions can be used as set members and dict keys."""
        plain = build_descriptor(Network.MAIN, mnemonic_env)
        linked = attach_companions(plain, {"optimism": Network.OPTIMISM})
        again = attach_companions(plain, {"optimism": "optimism"})

        assert len({plain, linked, again}) == 2
        assert {linked: "main"}[again] == "main"


class TestCompanionValidation:
    """Test companion graph validation and traversal."""

    @pytest.fixture
    def descriptors(self, mnemonic_env):
        sepolia = attach_companions(
            build_descriptor(Network.SEPOLIA, mnemonic_env), {"optimism": Network.OPTIMISM_TESTNET}
        )
        optimism_testnet = attach_companions(
            build_descriptor(Network.OPTIMISM_TESTNET, mnemonic_env), {"l1": Network.SEPOLIA}
        )
        return {Network.SEPOLIA: sepolia, Network.OPTIMISM_TESTNET: optimism_testnet}

    def test_consistent_graph_passes(self, descriptors):
        """Test that a graph without dangling links validates."""
        validate_companions(descriptors)
        assert find_dangling_companions(descriptors) == {}

    def test_dangling_reference_detected(self, descriptors, mnemonic_env):
        """Test that a link to an unconfigured network is reported."""
        descriptors[Network.MAIN] = attach_companions(
            build_descriptor(Network.MAIN, mnemonic_env), {"lisk": Network.LISK}
        )

        assert find_dangling_companions(descriptors) == {"main": {"lisk": "lisk"}}
        with pytest.raises(DanglingCompanionError) as exc_info:
            validate_companions(descriptors)

        assert "main.lisk" in str(exc_info.value)

    def test_resolve_companion(self, descriptors):
        """Test following a link to its target descriptor."""
        target = resolve_companion(descriptors, "optimism-testnet", "l1")
        assert target is descriptors[Network.SEPOLIA]

    def test_resolve_missing_role(self, descriptors):
        """Test that undeclared roles raise KeyError."""
        with pytest.raises(KeyError):
            resolve_companion(descriptors, Network.SEPOLIA, "l1")

    def test_resolve_dangling_target(self, descriptors):
        """Test that lazily resolved dangling links raise on traversal."""
        descriptors[Network.SEPOLIA] = attach_companions(
            descriptors[Network.SEPOLIA], {"lisk": Network.LISK_SEPOLIA}
        )

        with pytest.raises(DanglingCompanionError):
            resolve_companion(descriptors, Network.SEPOLIA, "lisk")

    def test_companion_graph(self, descriptors):
        """Test the exported directed graph."""
        assert companion_graph(descriptors) == {
            "sepolia": {"optimism": "optimism-testnet"},
            "optimism-testnet": {"l1": "sepolia"},
        }
