"""Human-readable rendering of WorkResults and BatchReports"""

from filebatch.models import BatchReport, WorkResult
from filebatch.utils import human_readable_size


def format_result_line(result: WorkResult) -> str:
    """One line per processed file."""
    if result.success:
        return f'OK   {result.path}: {result.line_count:,} lines, {human_readable_size(result.bytes_read)}'
    return f'FAIL {result.path}: {result.error_kind.value}: {result.error}'


def format_failures(report: BatchReport) -> list[str]:
    """Failure breakdown by kind followed by each failed file and its reason."""
    if not report.failed:
        return []
    counts = ', '.join(f'{count} {kind}' for kind, count in sorted(report.failure_counts().items()))
    lines = [f'Failures ({counts}):']
    for r in report.failures:
        lines.append(f'  {r.path}: {r.error}')
    return lines


def format_summary(report: BatchReport) -> str:
    """Final summary line: totals, successes and failures."""
    summary = (
        f'Processed {report.processed} of {report.discovered} files in {report.total_time:.1f}s: '
        f'{report.succeeded} succeeded, {report.failed} failed'
    )
    if report.cancelled:
        summary += f', {report.not_processed} not processed (cancelled)'
    return summary


def format_report(report: BatchReport) -> str:
    """Full text report: failure details, totals and the summary line."""
    lines = format_failures(report)
    lines.append(f'Lines: {report.total_lines:,}, bytes: {human_readable_size(report.total_bytes)}')
    lines.append(format_summary(report))
    return '\n'.join(lines)
