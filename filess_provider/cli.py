#!/usr/bin/env python3
"""
Operator CLI for the filess.io provider.

Runs one lifecycle operation against the filess_database resource and
prints the resulting state as JSON.

Examples:
  python -m filess_provider create --config database.json > state.json
  python -m filess_provider read --state state.json
  python -m filess_provider delete --state state.json
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from .config import get_config
from .integrations.exceptions import FilessError
from .schemas.database import DatabaseConfig, DatabaseState
from .schemas.provider import ProviderSettings
from .services.provisioning.base import OperationResult, ProvisionerException
from .provider import Provider
from .utils.async_utils import with_deadline

logger = logging.getLogger(__name__)

OPERATIONS = ("create", "read", "update", "delete")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="filess_provider",
        description="Manage filess.io databases",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("operation", choices=OPERATIONS, help="Lifecycle operation to run")
    parser.add_argument("--config", help="JSON file with the database configuration")
    parser.add_argument("--state", help="JSON file with the current database state")
    parser.add_argument("--api-url", help="filess.io API URL (default: $FILESS_API_URL)")
    parser.add_argument("--api-token", help="filess.io API token (default: $FILESS_API_TOKEN)")
    parser.add_argument("--timeout", type=float, default=None, help="Overall operation deadline in seconds")
    parser.add_argument("--log-level", default=None, help="Logging level (default: $LOG_LEVEL)")
    parser.add_argument("--show-secrets", action="store_true", help="Print the database password in clear")
    return parser


def load_json(path: str) -> Dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def provider_settings(args: argparse.Namespace) -> ProviderSettings:
    overrides = {}
    if args.api_url:
        overrides["api_url"] = args.api_url
    if args.api_token:
        overrides["api_token"] = args.api_token
    return ProviderSettings(**overrides)


async def run(args: argparse.Namespace, config_class=None) -> OperationResult:
    """Execute the requested operation and return its result."""
    if args.operation in ("create", "update") and not args.config:
        raise ValueError(f"{args.operation} requires --config")
    if args.operation in ("read", "update", "delete") and not args.state:
        raise ValueError(f"{args.operation} requires --state")

    config = DatabaseConfig(**load_json(args.config)) if args.config else None
    state = DatabaseState(**load_json(args.state)) if args.state else None

    async with Provider(provider_settings(args), config_class) as provider:
        resource = provider.resource("filess_database")

        if args.operation == "create":
            operation = resource.create(config)
        elif args.operation == "read":
            operation = resource.read(state)
        elif args.operation == "update":
            operation = resource.update(state, config)
        else:
            operation = resource.delete(state)

        return await with_deadline(operation, args.timeout, args.operation)


def print_result(result: OperationResult, show_secrets: bool = False) -> None:
    for diagnostic in result.diagnostics:
        print(f"{diagnostic.severity.value.upper()}: {diagnostic.summary}", file=sys.stderr)
        if diagnostic.detail:
            print(f"  {diagnostic.detail}", file=sys.stderr)
    print_state(result.state, show_secrets)


def print_state(state: DatabaseState, show_secrets: bool = False) -> None:
    print(json.dumps(state.export(show_secrets=show_secrets), indent=2))


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = get_config()

    logging.basicConfig(
        level=(args.log_level or cfg.LOG_LEVEL).upper(),
        format=cfg.LOG_FORMAT,
    )

    try:
        result = asyncio.run(run(args, cfg))
    except asyncio.TimeoutError:
        print(f"Error: {args.operation} timed out", file=sys.stderr)
        return 1
    except (FilessError, ProvisionerException) as e:
        logger.error(f"{args.operation} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        if e.resource_state is not None:
            # Created remotely despite the failure; keep it recorded
            print_state(e.resource_state, show_secrets=args.show_secrets)
        return 1
    except (ValidationError, ValueError, OSError) as e:
        logger.error(f"{args.operation} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print_result(result, show_secrets=args.show_secrets)
    return 0


if __name__ == "__main__":
    sys.exit(main())
