"""Command line entry point: print the resolved deployment configuration."""

import argparse
import json
import logging
import sys
from typing import List, Optional

from . import tasks
from .config import build_config
from .environment import load_environment
from .exceptions import ConfigurationError
from .rpc import check_chain_id

logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="crosschain-deploy-config",
        description="Resolve network, signing and fork settings for multi-chain deployments.",
    )
    parser.add_argument("--network", help="Print only this network's descriptor")
    parser.add_argument("--env-file", help="Load variables from this .env file first")
    parser.add_argument(
        "--show-secrets", action="store_true", help="Do not redact keys and seed phrases"
    )
    parser.add_argument(
        "--check-rpc",
        action="store_true",
        help="Query the network's endpoint and compare its chain id (requires --network)",
    )
    parser.add_argument(
        "--no-validate-companions",
        action="store_true",
        help="Leave dangling companion links to be resolved on first use",
    )
    parser.add_argument(
        "--list-tasks", action="store_true", help="Load task modules and list registered tasks"
    )
    parser.add_argument("--tasks-root", help="Task scripts directory (defaults to ./tasks)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    if args.check_rpc and not args.network:
        print("--check-rpc requires --network", file=sys.stderr)
        return 2

    load_environment(args.env_file)

    try:
        if args.list_tasks:
            tasks.load_tasks_from_env(tasks_root=args.tasks_root)
            for name in tasks.registry.names():
                print(name)
            return 0

        config = build_config(validate_companion_links=not args.no_validate_companions)

        if args.network:
            if args.check_rpc:
                descriptor = config.descriptor(args.network)
                check_chain_id(descriptor)
                logger.info("Endpoint for '%s' serves chain id %d", descriptor.name, descriptor.chain_id)
            output = config.network_to_dict(args.network, redact_secrets=not args.show_secrets)
        else:
            output = config.to_dict(redact_secrets=not args.show_secrets)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
