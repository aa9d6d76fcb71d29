"""
Shared helpers for the command-line entry points.
"""

import argparse
import json
from typing import Any

from dotenv import load_dotenv

from src.warehouse.connection import StoreClient


def load_environment() -> None:
    """Load a local .env file into the environment, if present."""
    load_dotenv()


def add_store_arguments(parser: argparse.ArgumentParser) -> None:
    """Add store connection options (defaulting to environment variables)."""
    parser.add_argument(
        "--url",
        default=None,
        help="Store base URL (default: $SUPABASE_URL)"
    )
    parser.add_argument(
        "--api-key",
        default=None,
        help="Store API key (default: $SUPABASE_SERVICE_ROLE_KEY)"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Request timeout in seconds (default: $SUPABASE_TIMEOUT or 30)"
    )


def create_client(args: argparse.Namespace) -> StoreClient:
    """Build an unopened store client from parsed arguments."""
    return StoreClient(url=args.url, api_key=args.api_key, timeout=args.timeout)


def print_json(payload: Any) -> None:
    """Write a JSON document to stdout."""
    print(json.dumps(payload, indent=2, default=str))
