"""
Admin CLI for managing uploaded CSV files.

Usage:
    python -m src.cli.admin_cli list-files [options]
    python -m src.cli.admin_cli set-status --file-id <file_id> --status <status>
    python -m src.cli.admin_cli delete-file --file-id <file_id>
    python -m src.cli.admin_cli preview --file-id <file_id> [--page N] [--limit N] [--search TEXT]
"""

import argparse
import sys
from datetime import datetime

import requests

from src.batch.file_manager import FileManager
from src.batch.preview import preview_csv
from src.core.models import UploadedFile
from src.observability.logger import get_logger
from src.utils.validation import (
    ValidationError,
    validate_file_id,
    validate_limit,
    validate_page,
    validate_status,
)
from src.warehouse.connection import SupabaseConfigError
from src.warehouse.file_records import FileRecordError, FileRecordStore
from src.warehouse.storage import ObjectStorage, StorageError

from .common import add_store_arguments, create_client, load_environment, print_json

logger = get_logger(__name__)


def format_timestamp(ts: datetime | None) -> str:
    """Format timestamp for display."""
    return ts.strftime("%Y-%m-%d %H:%M:%S") if ts else "N/A"


def format_size(size: int) -> str:
    """Human-readable byte size."""
    value = float(size)
    for unit in ("B", "KB", "MB"):
        if value < 1024:
            return f"{value:.0f} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GB"


def print_file_table(files: list[UploadedFile]) -> None:
    """Print uploaded files as a fixed-width table."""
    print(f"\n{'ID':<38} {'Name':<30} {'Size':>10} {'Status':<10} {'Uploaded'}")
    print(f"{'-' * 110}")
    for file in files:
        print(
            f"{file.id:<38} {file.name[:30]:<30} {format_size(file.size):>10} "
            f"{file.status.value:<10} {format_timestamp(file.uploaded_at)}"
        )
    print(f"\nTotal files: {len(files)}\n")


def list_files_command(args) -> int:
    """
    List uploaded files, newest first.

    Args:
        args: Command line arguments
    """
    with create_client(args) as client:
        try:
            files = FileManager(FileRecordStore(client), ObjectStorage(client)).list_files()
        except (FileRecordError, requests.RequestException) as e:
            logger.error(f"Error listing files: {e}")
            print_json({"success": False, "error": str(e)})
            return 1

    if args.json:
        print_json([file.model_dump(mode="json") for file in files])
    elif not files:
        print("\nNo files have been uploaded yet.\n")
    else:
        print_file_table(files)
    return 0


def set_status_command(args) -> int:
    """
    Set a file's lifecycle status.

    Args:
        args: Command line arguments
    """
    file_id = validate_file_id(args.file_id)
    status = validate_status(args.status)

    with create_client(args) as client:
        result = FileRecordStore(client).update_status(file_id, status)

    if not result.success:
        logger.error(f"Update file error: {result.error}")
    print_json(result.to_response())
    return 0 if result.success else 1


def delete_file_command(args) -> int:
    """
    Delete a file's stored object and metadata record.

    Args:
        args: Command line arguments
    """
    file_id = validate_file_id(args.file_id)

    with create_client(args) as client:
        result = FileManager(FileRecordStore(client), ObjectStorage(client)).delete(file_id)

    print_json(result.to_response())
    return 0 if result.success else 1


def preview_command(args) -> int:
    """
    Show one page of a stored CSV file.

    Args:
        args: Command line arguments
    """
    file_id = validate_file_id(args.file_id)
    page = validate_page(args.page)
    limit = validate_limit(args.limit)

    with create_client(args) as client:
        try:
            storage_path = FileRecordStore(client).get_storage_path(file_id)
            if not storage_path:
                print_json({"success": False, "error": "File not found in database"})
                return 1
            csv_text = ObjectStorage(client).download_text(storage_path)
        except (FileRecordError, StorageError, requests.RequestException) as e:
            logger.error(f"CSV data error: {e}")
            print_json({"success": False, "error": "Failed to load CSV data"})
            return 1

    preview = preview_csv(csv_text, page=page, limit=limit, search=args.search)
    print_json({"success": True, **preview.model_dump()})
    return 0


def main(argv=None) -> int:
    """Main CLI entry point."""
    load_environment()

    parser = argparse.ArgumentParser(
        description="Uploaded file administration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    list_parser = subparsers.add_parser("list-files", help="List uploaded files")
    list_parser.add_argument("--json", action="store_true", help="Print files as JSON")
    add_store_arguments(list_parser)

    status_parser = subparsers.add_parser("set-status", help="Set a file's status")
    status_parser.add_argument("--file-id", required=True, help="File identifier")
    status_parser.add_argument("--status", required=True, help="Target status")
    add_store_arguments(status_parser)

    delete_parser = subparsers.add_parser("delete-file", help="Delete a file")
    delete_parser.add_argument("--file-id", required=True, help="File identifier")
    add_store_arguments(delete_parser)

    preview_parser = subparsers.add_parser("preview", help="Preview a stored CSV file")
    preview_parser.add_argument("--file-id", required=True, help="File identifier")
    preview_parser.add_argument("--page", type=int, default=0, help="Zero-based page (default: 0)")
    preview_parser.add_argument("--limit", type=int, default=100, help="Rows per page (default: 100)")
    preview_parser.add_argument("--search", default="", help="Only rows containing this text")
    add_store_arguments(preview_parser)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    commands = {
        "list-files": list_files_command,
        "set-status": set_status_command,
        "delete-file": delete_file_command,
        "preview": preview_command,
    }

    try:
        return commands[args.command](args)
    except (ValidationError, SupabaseConfigError) as e:
        logger.error(str(e))
        print(f"\nError: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
