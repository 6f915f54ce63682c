"""
Report generator for evaluation results.

Writes finalized statistics to CSV or JSON files.
"""

from typing import Dict, Optional
from pathlib import Path
from enum import Enum
import json
import csv
import logging

from .metrics import EvaluationMetrics, MacroSum, PrecisionRecall


class ReportFormat(Enum):
    """Supported report formats."""
    CSV = "csv"
    JSON = "json"


class ReportGenerator:
    """
    Generate evaluation reports in CSV and JSON formats.

    One row (CSV) or entry (JSON) is written per named run; the macro
    averages, when given, are appended as extra rows or a summary section.
    """

    def __init__(
        self,
        results: Dict[str, PrecisionRecall],
        macro_sum: Optional[MacroSum] = None
    ):
        """
        Initialize report generator.

        Args:
            results: Finalized statistics by run name
            macro_sum: Optional macro accumulator over the same runs
        """
        self.results = results
        self.macro_sum = macro_sum
        self.logger = logging.getLogger(__name__)

    def generate_report(
        self,
        output_path: str,
        format: ReportFormat = ReportFormat.JSON
    ) -> None:
        """
        Generate evaluation report.

        Args:
            output_path: Path to output file
            format: Report format (CSV or JSON)
        """
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)

        if format == ReportFormat.CSV:
            self._generate_csv_report(output_file)
        elif format == ReportFormat.JSON:
            self._generate_json_report(output_file)
        else:
            raise ValueError(f"Unsupported format: {format}")

        self.logger.info(f"Generated {format.value} report: {output_path}")

    def _generate_csv_report(self, output_path: Path) -> None:
        """Generate CSV report with one row per run."""
        columns = list(EvaluationMetrics().to_dict().keys())

        with open(output_path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(['run'] + columns)

            for name, stats in self.results.items():
                row = stats.full_stats()
                writer.writerow([name] + [row[c] for c in columns])

            if self.macro_sum is not None and self.macro_sum.num_runs > 0:
                for label, values in (('macro_mean', self.macro_sum.averages()),
                                      ('macro_std', self.macro_sum.std())):
                    writer.writerow([label] + [values.get(c, '') for c in columns])

    def _generate_json_report(self, output_path: Path) -> None:
        """Generate JSON report."""
        data = {
            'runs': {name: stats.full_stats() for name, stats in self.results.items()},
        }
        if self.macro_sum is not None:
            data['macro'] = self.macro_sum.to_dict()

        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
