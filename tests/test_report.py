"""Tests for human-readable report rendering."""

from filebatch.models import BatchReport, FailureKind, WorkResult
from filebatch.report import format_failures, format_report, format_result_line, format_summary
from filebatch.utils import human_readable_size


def make_report(**kwargs):
    results = [
        WorkResult.ok('/logs/a.log', line_count=1234, bytes_read=2048),
        WorkResult.failed('/logs/b.log', FailureKind.NOT_FOUND, 'No such file or directory'),
        WorkResult.ok('/logs/c.log', line_count=0, bytes_read=0),
    ]
    defaults = {'root': '/logs', 'pattern': '*.log', 'workers': 2, 'discovered': 3, 'results': results}
    defaults.update(kwargs)
    return BatchReport(**defaults)


class TestHumanReadableSize:
    def test_units(self):
        assert human_readable_size(0) == '0.00 B'
        assert human_readable_size(2048) == '2.00 KB'
        assert human_readable_size(5 * 1024 * 1024) == '5.00 MB'


class TestFormatResultLine:
    def test_success_line(self):
        line = format_result_line(WorkResult.ok('/logs/a.log', line_count=1234, bytes_read=2048))
        assert line == 'OK   /logs/a.log: 1,234 lines, 2.00 KB'

    def test_failure_line(self):
        line = format_result_line(WorkResult.failed('/logs/b.log', FailureKind.NOT_FOUND, 'gone'))
        assert line == 'FAIL /logs/b.log: not_found: gone'


class TestFormatReport:
    def test_summary_counts(self):
        summary = format_summary(make_report(total_time=1.5))
        assert summary == 'Processed 3 of 3 files in 1.5s: 2 succeeded, 1 failed'

    def test_summary_mentions_cancellation(self):
        summary = format_summary(make_report(discovered=10, cancelled=True))
        assert '7 not processed (cancelled)' in summary

    def test_failure_breakdown(self):
        lines = format_failures(make_report())
        assert lines == ['Failures (1 not_found):', '  /logs/b.log: No such file or directory']

    def test_no_failures(self):
        report = make_report(results=[WorkResult.ok('/logs/a.log', line_count=1, bytes_read=2)], discovered=1)
        assert format_failures(report) == []

    def test_full_report(self):
        text = format_report(make_report())
        assert 'Failures (1 not_found):' in text
        assert 'Lines: 1,234, bytes: 2.00 KB' in text
        assert text.splitlines()[-1].startswith('Processed 3 of 3 files')
