"""Prometheus metrics for filebatch"""

from prometheus_client import Counter, Gauge, Histogram

# ============================================================================
# File Processing Metrics
# ============================================================================

files_processed_total = Counter(
    'filebatch_files_processed_total',
    'Total number of files processed',
    ['status'],  # success, or a FailureKind value
)

bytes_processed_total = Counter('filebatch_bytes_processed_total', 'Total bytes read across all files')

lines_processed_total = Counter('filebatch_lines_processed_total', 'Total lines counted across all files')

file_duration_seconds = Histogram(
    'filebatch_file_duration_seconds',
    'Time spent processing a single file',
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 10.0, 30.0, 60.0, 300.0],
    # 1ms to 5 minutes - small config files up to multi-GB logs
)


# ============================================================================
# Batch Metrics
# ============================================================================

batch_duration_seconds = Histogram(
    'filebatch_batch_duration_seconds',
    'Time spent processing a whole batch',
    buckets=[0.01, 0.1, 0.5, 1.0, 5.0, 10.0, 30.0, 60.0, 300.0, 900.0, 3600.0],
)

files_discovered_total = Counter('filebatch_files_discovered_total', 'Total number of files found during discovery')

active_workers = Gauge('filebatch_active_workers', 'Number of workers currently running')


def record_result(result) -> None:
    """Update per-file metrics from a WorkResult."""
    status = 'success' if result.success else result.error_kind.value
    files_processed_total.labels(status=status).inc()
    bytes_processed_total.inc(result.bytes_read)
    if result.line_count:
        lines_processed_total.inc(result.line_count)
    file_duration_seconds.observe(result.elapsed_seconds)
