"""
CSV ingestion pipeline orchestration.

Coordinates the flow: validate → map columns → parse + build → batch insert
"""

import time
from typing import Iterable, Optional, Sequence

from src.core.mapping import EXPECTED_COLUMNS, build_business_record, create_column_mapping
from src.core.models import ErrorKind, FileId, IngestionResult
from src.core.parsing import parse_csv_line, split_csv_lines
from src.core.validators import validate_business_csv
from src.observability.logger import get_logger
from src.observability.metrics import record_ingestion
from src.warehouse.batch_insert import BATCH_SIZE, BusinessBatchInserter, chunked

logger = get_logger(__name__)


class IngestionPipeline:
    """
    Turns the text of one uploaded CSV file into pre-release business rows.

    Flow:
    1. Split into non-blank lines and validate structure
    2. Map the header onto the expected columns (once per file)
    3. For each window of BATCH_SIZE data lines, parse and build records
    4. Insert the window as one batch; stop at the first failure

    Batches already written before a failure stay written.
    """

    def __init__(
        self,
        inserter: BusinessBatchInserter,
        expected_columns: Optional[Iterable[str]] = None,
        batch_size: Optional[int] = None,
    ):
        """
        Initialize ingestion pipeline.

        Args:
            inserter: Batch inserter bound to the target table
            expected_columns: Logical columns to map (defaults to EXPECTED_COLUMNS)
            batch_size: Data lines per batch (capped at the inserter's batch size)
        """
        self.inserter = inserter
        self.expected_columns = tuple(EXPECTED_COLUMNS if expected_columns is None else expected_columns)
        limit = inserter.batch_size or BATCH_SIZE
        self.batch_size = min(batch_size, limit) if batch_size else limit

    def process_csv(self, csv_text: str, file_id: FileId) -> IngestionResult:
        """
        Ingest one CSV file.

        Args:
            csv_text: Full file contents
            file_id: Owning file identifier stamped onto every record

        Returns:
            IngestionResult with ``processed`` on full success, ``error`` otherwise
        """
        started = time.monotonic()
        try:
            result = self._process(split_csv_lines(csv_text), file_id)
        except Exception as e:
            logger.exception(f"CSV processing error for file {file_id}")
            result = IngestionResult.fail(
                str(e) or "Processing failed", ErrorKind.NETWORK_OR_UNKNOWN
            )

        record_ingestion(result.success, time.monotonic() - started)
        return result

    def _process(self, lines: Sequence[str], file_id: FileId) -> IngestionResult:
        validation = validate_business_csv(lines)
        if not validation.is_valid:
            logger.warning(f"Rejected CSV for file {file_id}: {validation.error}")
            return IngestionResult.fail(validation.error, validation.error_kind)

        column_map = create_column_mapping(validation.headers, self.expected_columns)
        logger.info(
            f"Mapped {len(column_map)} of {len(self.expected_columns)} columns",
            extra={"file_id": file_id, "columns": sorted(column_map)},
        )

        data_lines = lines[1:]
        processed = 0

        for window in chunked(data_lines, self.batch_size):
            records = [
                build_business_record(parse_csv_line(line), column_map, file_id)
                for line in window
            ]

            insert_result = self.inserter.insert_batch(records)
            if not insert_result.success:
                return IngestionResult.fail(insert_result.error, insert_result.error_kind)

            processed += len(window)
            logger.debug(f"Processed {processed}/{len(data_lines)} rows for file {file_id}")

        return IngestionResult.ok(processed=processed)
