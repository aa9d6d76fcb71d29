"""
Command-line interface for uploading and ingesting CSV files.

Usage:
    python -m src.cli.batch_cli upload --input <file_path> [options]
    python -m src.cli.batch_cli ingest --file-id <file_id> [options]
"""

import argparse
import sys
from pathlib import Path

from src.batch.file_manager import FileManager
from src.batch.pipeline import IngestionPipeline
from src.batch.prerelease import PreReleaseIngestor
from src.core.mapping import ColumnConfigLoader
from src.observability.logger import get_logger
from src.observability.metrics import start_metrics_server
from src.utils.validation import (
    ValidationError,
    validate_file_id,
    validate_file_path,
    validate_limit,
)
from src.warehouse.batch_insert import BATCH_SIZE, BusinessBatchInserter
from src.warehouse.connection import SupabaseConfigError
from src.warehouse.file_records import FileRecordStore
from src.warehouse.storage import ObjectStorage

from .common import add_store_arguments, create_client, load_environment, print_json

logger = get_logger(__name__)


def upload_command(args) -> int:
    """
    Upload a local CSV file and record it as an uploaded file.

    Args:
        args: Command-line arguments

    Returns:
        Process exit code
    """
    try:
        input_path = Path(validate_file_path(args.input, "input"))
    except ValidationError as e:
        logger.error(str(e))
        return 2

    if not input_path.is_file():
        logger.error(f"Input file not found: {args.input}")
        return 1

    with create_client(args) as client:
        manager = FileManager(FileRecordStore(client), ObjectStorage(client))
        result = manager.upload(input_path.name, input_path.read_bytes())

    print_json(result.to_response())
    return 0 if result.success else 1


def ingest_command(args) -> int:
    """
    Ingest an uploaded file into the pre-release business table.

    Args:
        args: Command-line arguments

    Returns:
        Process exit code
    """
    try:
        file_id = validate_file_id(args.file_id)
        batch_size = validate_limit(args.batch_size, "batch_size", max_limit=BATCH_SIZE)
    except ValidationError as e:
        logger.error(str(e))
        return 2

    expected_columns = None
    if args.columns_config:
        try:
            expected_columns = ColumnConfigLoader(args.columns_config).load_columns()
        except (FileNotFoundError, ValueError) as e:
            logger.error(f"Invalid column configuration: {e}")
            return 2

    if args.metrics_port:
        start_metrics_server(args.metrics_port)

    with create_client(args) as client:
        inserter = BusinessBatchInserter(client, batch_size=batch_size)
        ingestor = PreReleaseIngestor(
            pipeline=IngestionPipeline(inserter, expected_columns=expected_columns),
            files=FileRecordStore(client),
            storage=ObjectStorage(client),
        )
        result = ingestor.add_file(file_id)

    print_json(result.to_response())
    return 0 if result.success else 1


def main(argv=None) -> int:
    """Main CLI entry point."""
    load_environment()

    parser = argparse.ArgumentParser(
        description="Business CSV upload and ingestion",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Upload a CSV file
  python -m src.cli.batch_cli upload --input data/texas_plumbers.csv

  # Ingest an uploaded file into the pre-release table
  python -m src.cli.batch_cli ingest --file-id 6f1c2a0e-3b7d-4f7e-9a51-1d2b3c4d5e6f

  # Ingest with a custom column list
  python -m src.cli.batch_cli ingest --file-id 6f1c2a0e --columns-config config/columns.yaml
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    upload_parser = subparsers.add_parser("upload", help="Upload a CSV file")
    upload_parser.add_argument(
        "--input",
        required=True,
        help="Path to the CSV file"
    )
    add_store_arguments(upload_parser)

    ingest_parser = subparsers.add_parser("ingest", help="Ingest an uploaded file")
    ingest_parser.add_argument(
        "--file-id",
        required=True,
        help="Identifier of the uploaded file"
    )
    ingest_parser.add_argument(
        "--batch-size",
        type=int,
        default=BATCH_SIZE,
        help=f"Records per insert request (default: {BATCH_SIZE})"
    )
    ingest_parser.add_argument(
        "--columns-config",
        default=None,
        help="YAML file overriding the expected column list"
    )
    ingest_parser.add_argument(
        "--metrics-port",
        type=int,
        default=None,
        help="Expose Prometheus metrics on this port while ingesting"
    )
    add_store_arguments(ingest_parser)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    command = upload_command if args.command == "upload" else ingest_command
    try:
        return command(args)
    except SupabaseConfigError as e:
        logger.error(str(e))
        print(f"\nError: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
