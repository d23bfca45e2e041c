# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics — single source of truth for all metric objects.
Imported by services, the store client and middleware. Never instantiated in controllers.
"""

from prometheus_client import Counter, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "jadwal_requests_total",
    "Total HTTP requests to jadwal service",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "jadwal_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "jadwal_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Business Metrics (updated by service layer only) ──
SCHEDULE_MUTATIONS = Counter(
    "jadwal_mutations_total",
    "Total committed schedule mutations",
    ["operation"],
)
VERSION_CONFLICTS = Counter(
    "jadwal_version_conflicts_total",
    "Writes rejected because the file changed since it was read",
    ["operation"],
)
VALIDATION_FAILURES = Counter(
    "jadwal_validation_failures_total",
    "Requests rejected by schedule validation",
    ["operation"],
)

# ── Blob store Metrics (updated by store clients) ──
BLOB_STORE_REQUESTS = Counter(
    "jadwal_blob_store_requests_total",
    "Requests sent to the remote blob store",
    ["method", "status"],
)
BLOB_STORE_LATENCY = Histogram(
    "jadwal_blob_store_latency_seconds",
    "Remote blob store round-trip latency in seconds",
    ["method"],
)
