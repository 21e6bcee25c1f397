"""Simulation result value objects.

Yearly results, period totals, capital-gain results and the final
comparison. All are frozen; ``to_dict`` renders French labels for tables.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence


@dataclass(frozen=True)
class AnnualResult:
    """Single year result for one regime."""

    year: int
    gross_rent: float
    charges: float
    amortization_computed: float
    amortization_deducted: float
    taxable_net_income_or_deficit: float
    imputed_deficit: float
    income_tax_delta: float
    social_levy: float
    total_tax: float
    net_income: float
    carry_forward_balance: float
    remaining_amortizable_base: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "Année": self.year,
            "Loyers Bruts": self.gross_rent,
            "Charges": -self.charges,
            "Amortissement Calculé": self.amortization_computed,
            "Amortissement Déduit": -self.amortization_deducted,
            "Résultat Fiscal": self.taxable_net_income_or_deficit,
            "Déficit Imputé": self.imputed_deficit,
            "IR Supplémentaire": self.income_tax_delta,
            "Prélèvements Sociaux": self.social_levy,
            "Impôt Total": self.total_tax,
            "Net Perçu": self.net_income,
            "Report": self.carry_forward_balance,
            "Base Amortissable Restante": self.remaining_amortizable_base,
        }


@dataclass(frozen=True)
class PeriodTotals:
    """Sums over the holding period for one regime."""

    years: int
    total_rent: float
    total_charges: float
    total_income_tax: float
    total_social_levy: float
    total_tax: float
    total_net_income: float
    cumulative_amortization_deducted: float
    carry_forward_history: tuple[float, ...]

    @property
    def final_carry_forward(self) -> float:
        return self.carry_forward_history[-1] if self.carry_forward_history else 0.0

    @classmethod
    def from_years(cls, results: Sequence[AnnualResult]) -> PeriodTotals:
        return cls(
            years=len(results),
            total_rent=sum(r.gross_rent for r in results),
            total_charges=sum(r.charges for r in results),
            total_income_tax=sum(r.income_tax_delta for r in results),
            total_social_levy=sum(r.social_levy for r in results),
            total_tax=sum(r.total_tax for r in results),
            total_net_income=sum(r.net_income for r in results),
            cumulative_amortization_deducted=sum(r.amortization_deducted for r in results),
            carry_forward_history=tuple(r.carry_forward_balance for r in results),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "Loyers Cumulés": self.total_rent,
            "Charges Cumulées": self.total_charges,
            "IR Cumulé": self.total_income_tax,
            "PS Cumulés": self.total_social_levy,
            "Impôts Cumulés": self.total_tax,
            "Net Cumulé": self.total_net_income,
            "Amortissements Déduits": self.cumulative_amortization_deducted,
            "Report Final": self.final_carry_forward,
        }


@dataclass(frozen=True)
class ResaleBasis:
    """Resale price and corrected acquisition cost, shared by both regimes."""

    resale_price: float
    notarial_fees: float
    renovation_allowance: float
    corrected_acquisition_cost: float

    @property
    def gross_gain_before_reintegration(self) -> float:
        return self.resale_price - self.corrected_acquisition_cost


@dataclass(frozen=True)
class CapitalGainResult:
    """Capital-gains tax at resale for one regime."""

    gross_gain_before_reintegration: float
    reintegrated_amortization: float
    gross_gain: float
    abatement_income_tax_fraction: float
    abatement_social_fraction: float
    taxable_gain_income_tax_base: float
    taxable_gain_social_base: float
    income_tax_due: float
    social_levy_due: float
    surtax_due: float
    total_tax_due: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "PV Brute Avant Réintégration": self.gross_gain_before_reintegration,
            "Amortissements Réintégrés": self.reintegrated_amortization,
            "PV Brute": self.gross_gain,
            "Abattement IR": self.abatement_income_tax_fraction,
            "Abattement PS": self.abatement_social_fraction,
            "Base IR": self.taxable_gain_income_tax_base,
            "Base PS": self.taxable_gain_social_base,
            "IR PV": self.income_tax_due,
            "PS PV": self.social_levy_due,
            "Surtaxe": self.surtax_due,
            "Impôt PV Total": self.total_tax_due,
        }


@dataclass(frozen=True)
class ComparativeResult:
    """Final balances; a positive advantage favours the furnished rental."""

    regime_a_total_balance: float
    regime_b_total_balance: float
    advantage: float

    @property
    def favours_furnished(self) -> bool:
        return self.advantage > 0


@dataclass(frozen=True)
class MarginalRates:
    """Year-one marginal rates before and after each regime's rental result."""

    before: float
    regime_a: float
    regime_b: float
