"""Multi-year simulation and regime comparison.

Drives both regime calculators year by year, then applies capital-gains
tax at resale and compares the final balances.
"""

from __future__ import annotations

from functools import lru_cache

from immo_fiscal.core.capital_gains import CapitalGainCalculator
from immo_fiscal.core.income_tax import marginal_rate
from immo_fiscal.core.logging import get_logger
from immo_fiscal.core.regimes import CarryForwardPolicy, RegimeCalculator, regime_calculator
from immo_fiscal.core.settings import get_settings
from immo_fiscal.core.tax_law import TAX_LAW_2025, TaxLawConfig
from immo_fiscal.domain.models.inputs import SimulationInputs
from immo_fiscal.domain.models.report import SimulationReport
from immo_fiscal.domain.models.results import (
    AnnualResult,
    CapitalGainResult,
    ComparativeResult,
    MarginalRates,
    PeriodTotals,
)

log = get_logger(__name__)


class MultiYearSimulator:
    """Runs one regime calculator for a fixed number of years.

    The carry-forward state is local to ``run``; the simulator itself holds
    no mutable state and can be reused.
    """

    def __init__(self, calculator: RegimeCalculator):
        self.calculator = calculator

    def run(self, years: int) -> tuple[list[AnnualResult], PeriodTotals]:
        """Simulate ``years`` consecutive years.

        Returns:
            Tuple of (yearly results, period totals)
        """
        state = self.calculator.initial_state()
        results: list[AnnualResult] = []
        for year in range(1, years + 1):
            result, state = self.calculator.step(year, state)
            results.append(result)
        return results, PeriodTotals.from_years(results)


def compare_regimes(
    regime_a_totals: PeriodTotals,
    regime_b_totals: PeriodTotals,
    regime_a_capital_gain: CapitalGainResult,
    regime_b_capital_gain: CapitalGainResult,
) -> ComparativeResult:
    """Final balance per regime and advantage of the furnished rental."""
    balance_a = regime_a_totals.total_net_income - regime_a_capital_gain.total_tax_due
    balance_b = regime_b_totals.total_net_income - regime_b_capital_gain.total_tax_due
    return ComparativeResult(
        regime_a_total_balance=balance_a,
        regime_b_total_balance=balance_b,
        advantage=balance_b - balance_a,
    )


def _year_one_marginal_rates(
    inputs: SimulationInputs,
    law: TaxLawConfig,
    year_a: AnnualResult,
    year_b: AnnualResult,
) -> MarginalRates:
    income, parts = inputs.household_taxable_income, inputs.household_parts

    def after(result: AnnualResult) -> float:
        extra = max(0.0, result.taxable_net_income_or_deficit)
        return marginal_rate(income + extra, parts, law.brackets)

    return MarginalRates(
        before=marginal_rate(income, parts, law.brackets),
        regime_a=after(year_a),
        regime_b=after(year_b),
    )


def _run_simulation(inputs: SimulationInputs, tax_law: TaxLawConfig) -> SimulationReport:
    years = inputs.holding_years
    regime_a = regime_calculator(CarryForwardPolicy.CAP_WITH_DEFICIT_CARRYFORWARD, inputs, tax_law)
    regime_b = regime_calculator(
        CarryForwardPolicy.CAP_BY_OPERATING_RESULT_WITH_AMORTIZATION_CARRYFORWARD, inputs, tax_law
    )
    years_a, totals_a = MultiYearSimulator(regime_a).run(years)
    years_b, totals_b = MultiYearSimulator(regime_b).run(years)

    gains = CapitalGainCalculator(inputs, tax_law)
    resale = gains.resale_basis()
    gain_a = gains.calculate(totals_a.cumulative_amortization_deducted, resale)
    gain_b = gains.calculate(totals_b.cumulative_amortization_deducted, resale)

    comparison = compare_regimes(totals_a, totals_b, gain_a, gain_b)
    log.debug(
        "simulation_completed",
        holding_years=years,
        regime_level=inputs.regime_level,
        balance_a=round(comparison.regime_a_total_balance, 2),
        balance_b=round(comparison.regime_b_total_balance, 2),
        advantage=round(comparison.advantage, 2),
    )

    return SimulationReport(
        inputs=inputs,
        tax_law_label=tax_law.label,
        regime_a_years=tuple(years_a),
        regime_b_years=tuple(years_b),
        regime_a_totals=totals_a,
        regime_b_totals=totals_b,
        resale=resale,
        regime_a_capital_gain=gain_a,
        regime_b_capital_gain=gain_b,
        comparison=comparison,
        marginal_rates=_year_one_marginal_rates(inputs, tax_law, years_a[0], years_b[0]),
    )


# Keyed on the full (inputs, tax_law) pair; both are frozen and hashable.
_cached_run = lru_cache(maxsize=get_settings().simulation_cache_size)(_run_simulation)


def run_simulation(
    inputs: SimulationInputs,
    tax_law: TaxLawConfig = TAX_LAW_2025,
) -> SimulationReport:
    """Run both regimes over the holding period and compare them.

    Args:
        inputs: Scenario inputs
        tax_law: Tax-law version to apply

    Returns:
        SimulationReport with yearly results, totals, capital gains and comparison
    """
    return _cached_run(inputs, tax_law)


def simulate(
    inputs: SimulationInputs,
    tax_law: TaxLawConfig = TAX_LAW_2025,
) -> ComparativeResult:
    """Entry point: final balances and advantage of the furnished rental."""
    return run_simulation(inputs, tax_law).comparison


def clear_simulation_cache() -> None:
    """Drop memoized simulation runs."""
    _cached_run.cache_clear()
