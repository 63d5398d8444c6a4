"""Network descriptor building and companion network links."""

from dataclasses import replace
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union

from .accounts import resolve_signing_profile
from .exceptions import ChainIdMismatchError, DanglingCompanionError
from .networks import Network, get_chain_id, get_rpc_url, parse_network
from .types import NetworkDescriptor


def build_descriptor(
    network: Union[Network, str],
    env: Mapping[str, str],
    chain_id: Optional[int] = None,
) -> NetworkDescriptor:
    """
    Build the connection and signing profile for one network.

    Each call reads the environment afresh and returns an independent
    descriptor; nothing is shared between networks.

    Args:
        network: Logical network
        env: Environment mapping
        chain_id: Expected chain id (defaults to the registered one)

    Returns:
        NetworkDescriptor without companion links

    Raises:
        UnknownNetworkError: If the network has no registered endpoint
        ChainIdMismatchError: If chain_id disagrees with the registry
    """
    network = parse_network(network)
    registered = get_chain_id(network)
    if chain_id is not None and chain_id != registered:
        raise ChainIdMismatchError(
            f"Chain id {chain_id} does not match registered chain id "
            f"{registered} for network '{network.value}'"
        )

    return NetworkDescriptor(
        network=network,
        url=get_rpc_url(network, env),
        chain_id=registered,
        accounts=resolve_signing_profile(env),
    )


def attach_companions(
    descriptor: NetworkDescriptor, links: Mapping[str, Union[Network, str]]
) -> NetworkDescriptor:
    """
    Attach companion links to a descriptor.

    Targets are stored as logical names and are not checked here. Links are
    merged over existing ones, so attaching the same links again is a no-op.

    Args:
        descriptor: Descriptor to extend
        links: Role label -> target network

    Returns:
        New descriptor carrying the merged links
    """
    merged: Dict[str, str] = dict(descriptor.companions)
    for role, target in links.items():
        merged[role] = target.value if isinstance(target, Network) else target

    return replace(descriptor, companions=MappingProxyType(merged))


def find_dangling_companions(
    descriptors: Mapping[Network, NetworkDescriptor]
) -> Dict[str, Dict[str, str]]:
    """
    Find companion links whose target has no descriptor.

    Returns:
        Network name -> {role: missing target} for every dangling link
    """
    known = {network.value for network in descriptors}
    dangling: Dict[str, Dict[str, str]] = {}
    for network, descriptor in descriptors.items():
        missing = {
            role: target
            for role, target in descriptor.companions.items()
            if target not in known
        }
        if missing:
            dangling[network.value] = missing
    return dangling


def validate_companions(descriptors: Mapping[Network, NetworkDescriptor]) -> None:
    """
    Check that every companion link targets a configured network.

    Raises:
        DanglingCompanionError: Naming each offending network, role and target
    """
    dangling = find_dangling_companions(descriptors)
    if dangling:
        details = "; ".join(
            f"{name}.{role} -> '{target}'"
            for name, links in sorted(dangling.items())
            for role, target in sorted(links.items())
        )
        raise DanglingCompanionError(f"Companion networks not configured: {details}")


def resolve_companion(
    descriptors: Mapping[Network, NetworkDescriptor],
    network: Union[Network, str],
    role: str,
) -> NetworkDescriptor:
    """
    Follow one companion link to its target descriptor.

    Args:
        descriptors: All configured descriptors
        network: Network whose link to follow
        role: Role label (e.g. "l1", "optimism")

    Returns:
        Descriptor of the companion network

    Raises:
        KeyError: If the network declares no such role
        DanglingCompanionError: If the target is not configured
    """
    network = parse_network(network)
    source = descriptors[network]
    if role not in source.companions:
        raise KeyError(f"Network '{network.value}' has no companion '{role}'")

    target = source.companions[role]
    for candidate, descriptor in descriptors.items():
        if candidate.value == target:
            return descriptor

    raise DanglingCompanionError(
        f"Companion '{role}' of network '{network.value}' targets unconfigured network '{target}'"
    )


def companion_graph(descriptors: Mapping[Network, NetworkDescriptor]) -> Dict[str, Dict[str, str]]:
    """Directed labeled graph of companion links, keyed by network name."""
    return {
        network.value: dict(descriptor.companions)
        for network, descriptor in descriptors.items()
        if descriptor.companions
    }
