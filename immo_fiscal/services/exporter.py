"""Export services for simulation results.

Handles saving simulation reports to JSON and yearly tables to CSV.
"""

import json
import os
from datetime import datetime
from typing import Any, Dict, Optional

from immo_fiscal.core.exceptions import ExportError
from immo_fiscal.core.logging import get_logger
from immo_fiscal.core.settings import get_settings
from immo_fiscal.domain.models.report import SimulationReport

log = get_logger(__name__)


class ResultExporter:
    """Handles exporting of simulation reports."""

    def __init__(self, output_dir: Optional[str] = None):
        """Initialize exporter.

        Args:
            output_dir: Directory where results will be saved (defaults to settings).
        """
        self.output_dir = output_dir or get_settings().export_dir
        self._ensure_dir()

    def _ensure_dir(self):
        """Ensure output directory exists."""
        if not os.path.exists(self.output_dir):
            try:
                os.makedirs(self.output_dir)
                log.info("created_output_directory", path=self.output_dir)
            except OSError as e:
                log.error("output_directory_creation_failed", error=str(e))
                raise ExportError(f"Cannot create {self.output_dir}: {e}") from e

    def _path(self, prefix: str, extension: str) -> str:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return os.path.join(self.output_dir, f"{prefix}_{timestamp}.{extension}")

    def save_report(
        self,
        report: SimulationReport,
        prefix: str = "simulation",
        metadata: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Save a report to a JSON file.

        Args:
            report: Simulation report to save.
            prefix: Filename prefix.
            metadata: Optional metadata to include in the file.

        Returns:
            Path to the saved file.
        """
        filepath = self._path(prefix, "json")
        payload = {
            "metadata": {
                "timestamp": datetime.now().isoformat(),
                "holding_years": report.inputs.holding_years,
                **(metadata or {}),
            },
            "report": report.to_dict(),
        }

        try:
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
        except OSError as e:
            log.error("report_save_failed", path=filepath, error=str(e))
            raise ExportError(f"Cannot write {filepath}: {e}") from e

        log.info("report_saved", path=filepath)
        return filepath

    def save_yearly_csv(self, report: SimulationReport, prefix: str = "annees") -> str:
        """Save the year-by-year table of both regimes to CSV."""
        filepath = self._path(prefix, "csv")
        try:
            report.yearly_dataframe().to_csv(filepath, index=False, encoding="utf-8")
        except OSError as e:
            log.error("yearly_csv_save_failed", path=filepath, error=str(e))
            raise ExportError(f"Cannot write {filepath}: {e}") from e

        log.info("yearly_csv_saved", path=filepath, rows=2 * report.inputs.holding_years)
        return filepath
