"""JSON-RPC probing of network endpoints."""

import requests

from .exceptions import ChainIdMismatchError, RpcError
from .types import NetworkDescriptor


def fetch_chain_id(rpc_url: str, timeout: float = 30) -> int:
    """
    Ask an endpoint which chain it serves.

    Args:
        rpc_url: RPC endpoint URL
        timeout: Request timeout in seconds

    Returns:
        Chain id reported by eth_chainId

    Raises:
        RpcError: If the request fails, the endpoint answers with a JSON-RPC
                  error, or the response is malformed
    """
    try:
        response = requests.post(
            rpc_url,
            json={
                "jsonrpc": "2.0",
                "method": "eth_chainId",
                "params": [],
                "id": 1,
            },
            timeout=timeout,
        )
    except requests.RequestException as e:
        raise RpcError(f"Network error during RPC call to {rpc_url}: {e}") from e

    # Check for HTTP errors
    if response.status_code != 200:
        raise RpcError(f"RPC request to {rpc_url} failed with status {response.status_code}")

    try:
        result = response.json()
    except ValueError as e:
        raise RpcError(f"RPC response from {rpc_url} is not JSON") from e

    # Check for RPC errors
    if "error" in result:
        raise RpcError(f"RPC error from {rpc_url}: {result['error']}")

    try:
        return int(result["result"], 16)
    except (KeyError, TypeError, ValueError) as e:
        raise RpcError(f"Malformed eth_chainId response from {rpc_url}: {result}") from e


def check_chain_id(descriptor: NetworkDescriptor, timeout: float = 30) -> None:
    """
    Verify that a descriptor's endpoint serves its registered chain.

    Raises:
        RpcError: If the endpoint cannot be queried
        ChainIdMismatchError: If the endpoint reports another chain id
    """
    reported = fetch_chain_id(descriptor.url, timeout=timeout)
    if reported != descriptor.chain_id:
        raise ChainIdMismatchError(
            f"Endpoint for network '{descriptor.name}' serves chain id {reported}, "
            f"expected {descriptor.chain_id}"
        )
