"""
CSV exporter

Writes the per-row issue log of an import, and the normalized records of a
dry run, as CSV.
"""

import csv
import json
from pathlib import Path
from typing import Iterable, List, Sequence

from ..models import ImportIssue


class CSVExporter:
    """
    Example:
        exporter = CSVExporter()
        exporter.export_issues(outcome.issues, "issues.csv")
    """

    ISSUE_COLUMNS = ['Row', 'Key', 'Reason']

    def export_issues(self, issues: Iterable[ImportIssue], output_path: str) -> int:
        """
        Export the issue log, ordered by row.

        Returns:
            Number of issues exported
        """
        issues = sorted(issues, key=lambda issue: issue.row)
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=self.ISSUE_COLUMNS)
            writer.writeheader()
            for issue in issues:
                writer.writerow({'Row': issue.row, 'Key': issue.key, 'Reason': issue.reason})

        return len(issues)

    def export_records(self, records: Sequence, columns: List[str], output_path: str) -> int:
        """
        Export normalized records, one column per field key.

        Lists are joined with '; ', nested signal data is written as JSON.

        Returns:
            Number of records exported
        """
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        fieldnames = ['row'] + list(columns)

        with open(output_path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames, extrasaction='ignore')
            writer.writeheader()
            for record in records:
                values = record.to_dict()
                row = {'row': record.row_number}
                for column in columns:
                    row[column] = self._cell(values.get(column))
                writer.writerow(row)

        return len(records)

    @staticmethod
    def _cell(value) -> str:
        if value is None:
            return ''
        if isinstance(value, list) and all(isinstance(v, str) for v in value):
            return '; '.join(value)
        if isinstance(value, (list, dict)):
            return json.dumps(value, ensure_ascii=False)
        return str(value)
