"""Monitoring module - Prometheus metrics for the secret bridge."""

from monitoring.recorders import Metrics, track_time

__all__ = [
    "Metrics",
    "track_time",
]
