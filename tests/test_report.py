"""
Tests for ValidationReport.

Tests cover:
- Collecting results from raw rows and records
- Pass/fail status and failing record numbers
- Tabulating issues with pandas
- Writing text and JSON reports
"""

import json

import pytest

from format_pkg.formats import build_bed, build_gtf
from format_pkg.logger import get_logger
from format_pkg.record import RecordView
from format_pkg.report import REPORT_COLUMNS, ValidationReport

BED_ROWS = [
    ['chr1', '0', '100'],
    ['chr1', 'x', '100'],
    ['chr2', '5', 'end'],
    ['chr3', '10', '20'],
]


@pytest.fixture
def report():
    """A BED3 report with two failing rows."""
    get_logger().clear_issues()
    report = ValidationReport(build_bed(3))
    report.validate_rows(BED_ROWS)
    return report


class TestReportCollection:
    """Test collecting validation results."""

    def test_counts(self, report):
        """Test record and issue counts."""
        assert report.num_records == 4
        assert report.num_issues == 2
        assert report.passed is False

    def test_failed_records(self, report):
        """Test that records are numbered from one by default."""
        assert report.failed_records() == [2, 3]

    def test_custom_start(self):
        """Test numbering rows from a given line number."""
        report = ValidationReport(build_bed(3))
        report.validate_rows(BED_ROWS, start=10)

        assert report.failed_records() == [11, 12]

    def test_empty_report_passes(self):
        """Test that a report without records passes."""
        report = ValidationReport(build_bed(3))

        assert report.passed is True
        assert report.num_issues == 0
        assert report.failed_records() == []

    def test_add_record(self):
        """Test adding the result of a record view."""
        gtf = build_gtf()
        record = RecordView.from_fields(gtf, ['chr1', 'src', 'exon', '1', 'ten', '.', 1, '.', 'x'])
        report = ValidationReport(gtf)

        result = report.add_record(7, record)

        assert result.passed is False
        assert [issue.field for issue in result.issues] == ['end']
        assert report.failed_records() == [7]

    def test_failures_logged_as_one_summary_issue(self, report):
        """Test that a batch of rows is logged as a single structured issue."""
        issues = get_logger().validation_issues

        assert len(issues) == 1
        assert issues[0]['category'] == 'record'
        assert issues[0]['details'] == {'format': 'BED', 'records': 4, 'failed_records': 2, 'issues': 2}

    def test_logged_issues_bounded_across_reports(self):
        """Test that large batches do not grow the logger's issue list per record."""
        logger = get_logger()
        logger.clear_issues()

        for _ in range(3):
            report = ValidationReport(build_bed(3))
            report.validate_rows([['chr1', 'x', '1']] * 500)
            assert report.num_issues == 500

        assert len(logger.validation_issues) == 3

    def test_clean_rows_not_logged(self):
        """Test that a passing batch adds no issue to the logger."""
        logger = get_logger()
        logger.clear_issues()

        ValidationReport(build_bed(3)).validate_rows([['chr1', '0', '1']] * 10)

        assert logger.validation_issues == []


class TestReportOutput:
    """Test tabulated and written reports."""

    def test_to_frame(self, report):
        """Test one row per issue."""
        frame = report.to_frame()

        assert list(frame.columns) == REPORT_COLUMNS
        assert frame['record'].tolist() == [2, 3]
        assert frame['field'].tolist() == ['chromStart', 'chromEnd']
        assert frame['validator_type'].tolist() == ['integer', 'integer']

    def test_to_frame_empty(self):
        """Test that a clean report gives an empty frame with all columns."""
        report = ValidationReport(build_bed(3))
        report.validate_rows([['chr1', '0', '1']])

        frame = report.to_frame()
        assert frame.empty
        assert list(frame.columns) == REPORT_COLUMNS

    def test_summary(self, report):
        """Test the summary counts."""
        summary = report.summary()

        assert summary['format'] == 'BED'
        assert summary['records'] == 4
        assert summary['failed_records'] == 2
        assert summary['issues'] == 2
        assert summary['issues_per_field'] == {'chromEnd': 1, 'chromStart': 1}
        assert summary['overall_status'] == 'FAILED'

    def test_format_lines(self, report):
        """Test the text rendering of the report."""
        text = '\n'.join(report.format_lines())

        assert 'BED RECORD VALIDATION REPORT' in text
        assert 'FAILED' in text
        assert 'Record 2 (1 issue(s)):' in text
        assert 'chromEnd' in text

    def test_write_text(self, report, tmp_path):
        """Test writing a text report, creating parent directories."""
        path = report.write(tmp_path / 'reports' / 'bed.txt')

        assert path.exists()
        assert 'Overall Status' in path.read_text(encoding='utf-8')

    def test_write_json(self, report, tmp_path):
        """Test writing a JSON report."""
        path = report.write(tmp_path / 'bed.json', format='json')
        data = json.loads(path.read_text(encoding='utf-8'))

        assert data['summary']['issues'] == 2
        assert [r['passed'] for r in data['records']] == [True, False, False, True]
        assert data['records'][1]['issues'][0]['value'] == 'x'

    def test_write_unknown_format(self, report, tmp_path):
        """Test that unknown report formats are rejected."""
        with pytest.raises(ValueError, match="Unknown format"):
            report.write(tmp_path / 'bed.xml', format='xml')
