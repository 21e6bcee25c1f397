"""Services built on the simulation core: what-if sweeps and export."""

from .exporter import ResultExporter
from .sensitivity import SensitivitySweep

__all__ = ["ResultExporter", "SensitivitySweep"]
