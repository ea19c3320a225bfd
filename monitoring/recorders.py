"""Metrics recorder - stateless functions to record metrics."""

import time
from contextlib import contextmanager
from typing import Generator

from monitoring.definitions import (
    DESCRIPTORS_REJECTED,
    METADATA_CREATED,
    OVERLAY_KEYS,
    SECRET_READ_LATENCY,
    SECRET_READS,
)


@contextmanager
def track_time() -> Generator[dict, None, None]:
    """
    Context manager to track execution time.

    Usage:
        with track_time() as t:
            source.read_secret(path)
        print(t["duration"])  # seconds
    """
    result = {"duration": 0.0}
    start = time.perf_counter()
    try:
        yield result
    finally:
        result["duration"] = time.perf_counter() - start


class Metrics:
    """
    Stateless metrics recorder.

    Usage:
        from monitoring import Metrics, track_time

        with track_time() as t:
            data = source.read_secret(metadata.path)
        Metrics.secret_read("file", latency=t["duration"])
    """

    @staticmethod
    def metadata_created(backend: str) -> None:
        METADATA_CREATED.labels(backend=backend).inc()

    @staticmethod
    def descriptor_rejected(descriptor_type: str) -> None:
        DESCRIPTORS_REJECTED.labels(descriptor_type=descriptor_type).inc()

    @staticmethod
    def secret_read(source: str, latency: float = None) -> None:
        """Record successful payload read."""
        SECRET_READS.labels(source=source, status="success").inc()
        if latency:
            SECRET_READ_LATENCY.labels(source=source).observe(latency)

    @staticmethod
    def secret_read_error(source: str) -> None:
        SECRET_READS.labels(source=source, status="error").inc()

    @staticmethod
    def overlay_resolved(backend: str, keys: int) -> None:
        OVERLAY_KEYS.labels(backend=backend).set(keys)
