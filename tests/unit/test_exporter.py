"""Unit tests for immo_fiscal.services.exporter module."""

import json
import os

import pandas as pd

from immo_fiscal.core.simulation import run_simulation
from immo_fiscal.services.exporter import ResultExporter


class TestResultExporter:
    def test_creates_directory(self, tmp_path):
        target = tmp_path / "out"
        ResultExporter(str(target))
        assert target.is_dir()

    def test_save_report(self, tmp_path, reference_inputs):
        exporter = ResultExporter(str(tmp_path))
        path = exporter.save_report(run_simulation(reference_inputs), metadata={"source": "test"})
        assert os.path.exists(path)
        assert os.path.basename(path).startswith("simulation_")

        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
        assert payload["metadata"]["source"] == "test"
        assert payload["metadata"]["holding_years"] == 15
        assert payload["report"]["regime_b"]["years"][0]["Loyers Bruts"] == 9_600

    def test_save_yearly_csv(self, tmp_path, reference_inputs):
        path = ResultExporter(str(tmp_path)).save_yearly_csv(run_simulation(reference_inputs))
        frame = pd.read_csv(path)
        assert len(frame) == 30
        assert "Régime" in frame.columns
