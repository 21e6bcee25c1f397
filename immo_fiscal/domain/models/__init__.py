"""Data models for immo_fiscal."""

from .inputs import RegimeLevel, SimulationInputs
from .report import SimulationReport
from .results import (
    AnnualResult,
    CapitalGainResult,
    ComparativeResult,
    MarginalRates,
    PeriodTotals,
    ResaleBasis,
)

__all__ = [
    "RegimeLevel",
    "SimulationInputs",
    "AnnualResult",
    "PeriodTotals",
    "ResaleBasis",
    "CapitalGainResult",
    "ComparativeResult",
    "MarginalRates",
    "SimulationReport",
]
