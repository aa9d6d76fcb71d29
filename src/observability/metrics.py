"""
Prometheus metrics for bizdir-ingest

Tracks records ingested, batch writes, file status updates and
ingestion duration on a private registry.
"""
import os
from typing import Optional

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

# Global registry for metrics
REGISTRY = CollectorRegistry()


# =======================
# INGESTION METRICS
# =======================

records_ingested_total = Counter(
    name="ingest_records_total",
    documentation="Total number of business records written to the store",
    registry=REGISTRY,
)

ingestions_total = Counter(
    name="ingest_files_total",
    documentation="Total number of CSV ingestion runs",
    labelnames=["outcome"],  # success, failure
    registry=REGISTRY,
)

batch_inserts_total = Counter(
    name="ingest_batch_inserts_total",
    documentation="Total number of batch insert requests",
    labelnames=["status"],  # success, failure
    registry=REGISTRY,
)

batch_size = Histogram(
    name="ingest_batch_size",
    documentation="Number of records per batch insert",
    buckets=[1, 10, 50, 100, 250, 500, 1000],
    registry=REGISTRY,
)

ingestion_duration_seconds = Histogram(
    name="ingest_duration_seconds",
    documentation="Time spent ingesting one CSV file",
    buckets=[0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0, 120.0],
    registry=REGISTRY,
)

# =======================
# FILE METRICS
# =======================

status_updates_total = Counter(
    name="ingest_status_updates_total",
    documentation="Total number of file status updates",
    labelnames=["status", "result"],  # result: success, failure
    registry=REGISTRY,
)

uploads_total = Counter(
    name="ingest_uploads_total",
    documentation="Total number of CSV uploads",
    labelnames=["result"],  # success, rejected, failure
    registry=REGISTRY,
)


# =======================
# HELPER FUNCTIONS
# =======================

def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics in text format

    Returns:
        Metrics in Prometheus text format
    """
    return generate_latest(REGISTRY)


def start_metrics_server(port: Optional[int] = None) -> None:
    """
    Start HTTP server for Prometheus metrics

    Args:
        port: Port to listen on (defaults to env var METRICS_PORT or 8000)
    """
    # Imported lazily so importing this module never binds a port
    from prometheus_client import start_http_server

    metrics_port = port or int(os.getenv("METRICS_PORT", "8000"))
    start_http_server(metrics_port, registry=REGISTRY)


def record_batch_insert(record_count: int, success: bool) -> None:
    """
    Record one batch insert request.

    Args:
        record_count: Records in the batch
        success: Whether the store accepted the batch
    """
    batch_inserts_total.labels(status="success" if success else "failure").inc()
    batch_size.observe(record_count)
    if success:
        records_ingested_total.inc(record_count)


def record_ingestion(success: bool, duration_seconds: float) -> None:
    """
    Record the outcome of one ingestion run.

    Args:
        success: Whether every batch was written
        duration_seconds: Wall time of the run
    """
    ingestions_total.labels(outcome="success" if success else "failure").inc()
    ingestion_duration_seconds.observe(duration_seconds)


def record_status_update(status: str, success: bool) -> None:
    """Record a file status update attempt."""
    status_updates_total.labels(status=status, result="success" if success else "failure").inc()


def record_upload(result: str) -> None:
    """Record an upload attempt (success, rejected or failure)."""
    uploads_total.labels(result=result).inc()
