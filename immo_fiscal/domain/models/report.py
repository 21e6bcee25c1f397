"""Full simulation report.

Bundles everything a presentation layer renders: yearly results of both
regimes, period totals, capital-gain results and the final comparison.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pandas as pd

from immo_fiscal.domain.models.inputs import SimulationInputs
from immo_fiscal.domain.models.results import (
    AnnualResult,
    CapitalGainResult,
    ComparativeResult,
    MarginalRates,
    PeriodTotals,
    ResaleBasis,
)

REGIME_A_LABEL = "Loyer encadré"
REGIME_B_LABEL = "LMNP"


@dataclass(frozen=True)
class SimulationReport:
    """Complete result of one simulation run."""

    inputs: SimulationInputs
    tax_law_label: str
    regime_a_years: tuple[AnnualResult, ...]
    regime_b_years: tuple[AnnualResult, ...]
    regime_a_totals: PeriodTotals
    regime_b_totals: PeriodTotals
    resale: ResaleBasis
    regime_a_capital_gain: CapitalGainResult
    regime_b_capital_gain: CapitalGainResult
    comparison: ComparativeResult
    marginal_rates: MarginalRates

    def yearly_dataframe(self) -> pd.DataFrame:
        """Year-by-year results of both regimes, one row per regime and year."""
        rows = [{"Régime": REGIME_A_LABEL, **r.to_dict()} for r in self.regime_a_years]
        rows += [{"Régime": REGIME_B_LABEL, **r.to_dict()} for r in self.regime_b_years]
        return pd.DataFrame(rows)

    def annual_comparison(self) -> pd.DataFrame:
        """First-year side-by-side: rent, charges, total tax and net income."""
        a, b = self.regime_a_years[0], self.regime_b_years[0]
        return pd.DataFrame(
            {
                REGIME_A_LABEL: [a.gross_rent, a.charges, a.total_tax, a.net_income],
                REGIME_B_LABEL: [b.gross_rent, b.charges, b.total_tax, b.net_income],
            },
            index=["Loyer annuel", "Charges", "Impôt total", "Net perçu"],
        )

    def global_comparison(self) -> pd.DataFrame:
        """Whole-period side-by-side, ending with the final balance."""
        ta, tb = self.regime_a_totals, self.regime_b_totals
        return pd.DataFrame(
            {
                REGIME_A_LABEL: [
                    ta.total_rent,
                    ta.total_tax,
                    self.regime_a_capital_gain.total_tax_due,
                    self.comparison.regime_a_total_balance,
                ],
                REGIME_B_LABEL: [
                    tb.total_rent,
                    tb.total_tax,
                    self.regime_b_capital_gain.total_tax_due,
                    self.comparison.regime_b_total_balance,
                ],
            },
            index=["Loyers cumulés", "Impôts cumulés", "Impôt PV", "Bilan net"],
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly representation."""
        return {
            "inputs": self.inputs.model_dump(mode="json"),
            "tax_law": self.tax_law_label,
            "resale": {
                "resale_price": self.resale.resale_price,
                "notarial_fees": self.resale.notarial_fees,
                "renovation_allowance": self.resale.renovation_allowance,
                "corrected_acquisition_cost": self.resale.corrected_acquisition_cost,
                "gross_gain_before_reintegration": self.resale.gross_gain_before_reintegration,
            },
            "regime_a": {
                "years": [r.to_dict() for r in self.regime_a_years],
                "totals": self.regime_a_totals.to_dict(),
                "capital_gain": self.regime_a_capital_gain.to_dict(),
            },
            "regime_b": {
                "years": [r.to_dict() for r in self.regime_b_years],
                "totals": self.regime_b_totals.to_dict(),
                "capital_gain": self.regime_b_capital_gain.to_dict(),
            },
            "comparison": {
                "regime_a_total_balance": self.comparison.regime_a_total_balance,
                "regime_b_total_balance": self.comparison.regime_b_total_balance,
                "advantage": self.comparison.advantage,
            },
            "marginal_rates": {
                "before": self.marginal_rates.before,
                "regime_a": self.marginal_rates.regime_a,
                "regime_b": self.marginal_rates.regime_b,
            },
        }
