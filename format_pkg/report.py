"""Validation report for many records of one format."""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence, Union
import json

import pandas as pd

from format_pkg.format import FormatDescriptor, ValidationIssue
from format_pkg.logger import get_logger
from format_pkg.record import RecordView

__all__ = [
    'RecordValidationRecord',
    'ValidationReport',
]

REPORT_COLUMNS = ['record', 'field', 'value', 'validator_type', 'message']


@dataclass
class RecordValidationRecord:
    """Validation outcome of a single record."""
    record: int
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.issues

    def format_issues(self, indent: str = "  ") -> List[str]:
        """Format the failing fields of this record."""
        lines = []
        if self.issues:
            lines.append(f"{indent}Record {self.record} ({len(self.issues)} issue(s)):")
            for i, issue in enumerate(self.issues, 1):
                lines.append(f"{indent}  {i}. {issue.field}: {issue.message}")
        return lines


class ValidationReport:
    """
    Collects the validation results of records checked against one format.

    Results are collected, never raised, so a whole file can be checked before
    deciding whether any failure is fatal.

    Example:
        >>> from format_pkg.formats import build_bed
        >>> report = ValidationReport(build_bed(3))
        >>> report.validate_rows([['chr1', '0', '100'], ['chr1', 'x', '100']])
        >>> report.passed
        False
        >>> report.to_frame()['field'].tolist()
        ['chromStart']
    """

    def __init__(self, descriptor: FormatDescriptor):
        self.logger = get_logger()
        self.descriptor = descriptor
        self.records: List[RecordValidationRecord] = []

    def add(self, record_index: int, issues: Iterable[ValidationIssue]) -> RecordValidationRecord:
        """Add the validation outcome of one record."""
        result = RecordValidationRecord(record=record_index, issues=list(issues))
        self.records.append(result)
        if not result.passed:
            self.logger.debug(
                f"Record {record_index} failed validation for {len(result.issues)} field(s)"
            )
        return result

    def add_record(self, record_index: int, record: RecordView) -> RecordValidationRecord:
        return self.add(record_index, record.validate())

    def validate_rows(self, rows: Iterable[Sequence[Any]], start: int = 1) -> None:
        """
        Validate raw rows in column order, numbering records from ``start``.

        Per-record issues stay on the report; the logger receives one summary
        issue per call that had failing records.
        """
        checked = failed = issue_count = 0
        for index, row in enumerate(rows, start):
            result = self.add(index, self.descriptor.validate_values(row))
            checked += 1
            if not result.passed:
                failed += 1
                issue_count += len(result.issues)

        if failed:
            self.logger.add_validation_issue(
                level='WARNING',
                category='record',
                message=f"{failed} of {checked} {self.descriptor.name} record(s) failed validation",
                details={
                    'format': self.descriptor.name,
                    'records': checked,
                    'failed_records': failed,
                    'issues': issue_count,
                },
            )

    @property
    def num_records(self) -> int:
        return len(self.records)

    @property
    def num_issues(self) -> int:
        return sum(len(result.issues) for result in self.records)

    @property
    def passed(self) -> bool:
        return all(result.passed for result in self.records)

    def failed_records(self) -> List[int]:
        return [result.record for result in self.records if not result.passed]

    def to_frame(self) -> pd.DataFrame:
        """One row per validation issue."""
        rows = [
            {'record': result.record, **issue.to_dict()}
            for result in self.records
            for issue in result.issues
        ]
        return pd.DataFrame(rows, columns=REPORT_COLUMNS)

    def summary(self) -> Dict[str, Any]:
        """Issue counts overall and per field."""
        frame = self.to_frame()
        per_field = frame.groupby('field').size().to_dict() if not frame.empty else {}
        return {
            'format': self.descriptor.name,
            'records': self.num_records,
            'failed_records': len(self.failed_records()),
            'issues': self.num_issues,
            'issues_per_field': {str(k): int(v) for k, v in per_field.items()},
            'overall_status': 'PASSED' if self.passed else 'FAILED',
        }

    def format_lines(self) -> List[str]:
        """Render the report as text lines."""
        summary = self.summary()
        status_symbol = "✓" if self.passed else "✗"

        lines = []
        lines.append("=" * 80)
        lines.append(f"  {self.descriptor.name} RECORD VALIDATION REPORT")
        lines.append("=" * 80)
        lines.append("")
        lines.append(f"  Generated:      {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        lines.append(f"  Overall Status: {status_symbol} {summary['overall_status']}")
        lines.append(f"  Records:        {summary['records']}")
        lines.append(f"  Failed Records: {summary['failed_records']}")
        lines.append(f"  Issues:         {summary['issues']}")
        lines.append("")

        if summary['issues_per_field']:
            lines.append("  Issues per field:")
            items = sorted(summary['issues_per_field'].items())
            for i, (field_name, count) in enumerate(items):
                tree_char = "└─" if i == len(items) - 1 else "├─"
                lines.append(f"    {tree_char} {field_name}: {count}")
            lines.append("")

        for result in self.records:
            if not result.passed:
                lines.extend(result.format_issues(indent="  "))
        return lines

    def write(self, report_path: Union[str, Path], format: str = "text") -> Path:
        """
        Write the report to a file.

        Args:
            report_path: Output path, parent directories are created
            format: 'text' or 'json'

        Returns:
            Path of the written file
        """
        report_path = Path(report_path)
        report_path.parent.mkdir(parents=True, exist_ok=True)

        if format == "text":
            report_path.write_text('\n'.join(self.format_lines()) + '\n', encoding='utf-8')
        elif format == "json":
            data = {
                'summary': self.summary(),
                'records': [
                    {
                        'record': result.record,
                        'passed': result.passed,
                        'issues': [issue.to_dict() for issue in result.issues],
                    }
                    for result in self.records
                ],
            }
            with open(report_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False, default=str)
        else:
            raise ValueError(f"Unknown format: {format}. Use 'text' or 'json'")

        self.logger.info(f"Report written to: {report_path}")
        return report_path
