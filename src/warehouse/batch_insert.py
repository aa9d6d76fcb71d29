"""
Batched inserts of business records into the pre-release table.

Batches are written one at a time; the first rejected batch stops the run
and already committed batches are left in place.
"""

from typing import Any, Iterator, Sequence

import requests

from src.core.models import ErrorKind, InsertResult
from src.observability.logger import get_logger
from src.observability.metrics import record_batch_insert

from .connection import StoreClient, describe_failure

logger = get_logger(__name__)

BATCH_SIZE = 1000
PRE_RELEASE_TABLE = "pre_release_businesses"


def chunked(items: Sequence[Any], size: int) -> Iterator[Sequence[Any]]:
    """
    Yield contiguous slices of at most ``size`` items.

    Raises:
        ValueError: If size is not positive
    """
    if size <= 0:
        raise ValueError(f"Batch size must be positive, got {size}")
    for start in range(0, len(items), size):
        yield items[start:start + size]


class BusinessBatchInserter:
    """
    Writes business records to the store through its REST insert endpoint.
    """

    def __init__(
        self,
        client: StoreClient,
        table: str = PRE_RELEASE_TABLE,
        batch_size: int = BATCH_SIZE,
    ):
        """
        Initialize batch inserter.

        Args:
            client: Open store client
            table: Target collection
            batch_size: Maximum records per request
        """
        if batch_size <= 0:
            raise ValueError(f"Batch size must be positive, got {batch_size}")
        self.client = client
        self.table = table
        self.batch_size = batch_size

    def insert_batch(self, records: Sequence[dict[str, Any]]) -> InsertResult:
        """
        Send one batch as a single write.

        Args:
            records: Records to insert

        Returns:
            InsertResult; on failure ``error`` carries the store's status and body
        """
        if not records:
            return InsertResult.ok(inserted=0)

        try:
            response = self.client.request(
                "POST",
                f"rest/v1/{self.table}",
                json=list(records),
                headers={"Prefer": "return=minimal"},
            )
        except requests.RequestException as e:
            logger.error(f"Batch insert request failed: {e}")
            record_batch_insert(len(records), success=False)
            return InsertResult.fail(
                str(e) or "Batch insert failed",
                ErrorKind.NETWORK_OR_UNKNOWN,
            )

        if not response.ok:
            error = describe_failure("Batch insert failed", response)
            logger.error(error, extra={"table": self.table, "batch_records": len(records)})
            record_batch_insert(len(records), success=False)
            return InsertResult.fail(error, ErrorKind.BATCH_INSERT_FAILED)

        record_batch_insert(len(records), success=True)
        logger.debug(f"Inserted batch of {len(records)} records into {self.table}")
        return InsertResult.ok(inserted=len(records))

    def insert_all(self, records: Sequence[dict[str, Any]]) -> InsertResult:
        """
        Send records in sequential batches of at most ``batch_size``.

        Stops at the first failing batch; later batches are never sent.

        Args:
            records: All records to insert, in order

        Returns:
            InsertResult with the total inserted on success
        """
        inserted = 0
        for number, batch in enumerate(chunked(records, self.batch_size), start=1):
            result = self.insert_batch(batch)
            if not result.success:
                logger.error(
                    f"Stopping after failed batch {number}",
                    extra={"inserted_before_failure": inserted},
                )
                return InsertResult.fail(result.error, result.error_kind)
            inserted += result.inserted

        return InsertResult.ok(inserted=inserted)
