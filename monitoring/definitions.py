"""Prometheus metric definitions."""

from prometheus_client import Counter, Gauge, Histogram

# ============================================================
# METADATA METRICS
# ============================================================

METADATA_CREATED = Counter(
    "vaultbridge_metadata_created_total",
    "Secret backend metadata created",
    ["backend"],
)

DESCRIPTORS_REJECTED = Counter(
    "vaultbridge_descriptors_rejected_total",
    "Descriptors refused by the backend registry",
    ["descriptor_type"],
)

# ============================================================
# SECRET SOURCE METRICS
# ============================================================

SECRET_READS = Counter(
    "vaultbridge_secret_reads_total", "Secret payload reads", ["source", "status"]
)

SECRET_READ_LATENCY = Histogram(
    "vaultbridge_secret_read_latency_seconds",
    "Time to read a secret payload",
    ["source"],
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
)

# ============================================================
# OVERLAY METRICS
# ============================================================

OVERLAY_KEYS = Gauge(
    "vaultbridge_overlay_keys", "Properties in the last overlay", ["backend"]
)
