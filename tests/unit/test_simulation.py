"""Unit tests for immo_fiscal.core.simulation module."""

import pytest

from immo_fiscal.core.regimes import FurnishedRentalRegime, RegulatedRentRegime
from immo_fiscal.core.simulation import (
    MultiYearSimulator,
    compare_regimes,
    run_simulation,
    simulate,
)
from immo_fiscal.core.tax_law import TaxLawConfig
from immo_fiscal.domain.models import (
    CapitalGainResult,
    ComparativeResult,
    PeriodTotals,
    SimulationInputs,
)


def _gain(total: float) -> CapitalGainResult:
    return CapitalGainResult(
        gross_gain_before_reintegration=0.0,
        reintegrated_amortization=0.0,
        gross_gain=0.0,
        abatement_income_tax_fraction=0.0,
        abatement_social_fraction=0.0,
        taxable_gain_income_tax_base=0.0,
        taxable_gain_social_base=0.0,
        income_tax_due=total,
        social_levy_due=0.0,
        surtax_due=0.0,
        total_tax_due=total,
    )


def _totals(net: float) -> PeriodTotals:
    return PeriodTotals(
        years=1,
        total_rent=net,
        total_charges=0.0,
        total_income_tax=0.0,
        total_social_levy=0.0,
        total_tax=0.0,
        total_net_income=net,
        cumulative_amortization_deducted=0.0,
        carry_forward_history=(0.0,),
    )


class TestMultiYearSimulator:
    """Tests for MultiYearSimulator."""

    def test_runs_exactly_holding_years(self, reference_inputs):
        results, totals = MultiYearSimulator(RegulatedRentRegime(reference_inputs)).run(15)
        assert [r.year for r in results] == list(range(1, 16))
        assert totals.years == 15
        assert len(totals.carry_forward_history) == 15

    def test_single_year(self, reference_inputs):
        results, totals = MultiYearSimulator(FurnishedRentalRegime(reference_inputs)).run(1)
        assert len(results) == 1
        assert totals.total_tax == pytest.approx(results[0].total_tax)

    def test_totals_match_yearly_sums(self, reference_inputs):
        results, totals = MultiYearSimulator(RegulatedRentRegime(reference_inputs)).run(15)
        assert totals.total_tax == pytest.approx(sum(r.total_tax for r in results))
        assert totals.total_net_income == pytest.approx(sum(r.net_income for r in results))
        assert totals.cumulative_amortization_deducted == pytest.approx(84_000)

    def test_reusable(self, reference_inputs):
        """State lives in the run, so two runs give identical results."""
        simulator = MultiYearSimulator(FurnishedRentalRegime(reference_inputs))
        first, _ = simulator.run(10)
        second, _ = simulator.run(10)
        assert first == second


class TestCompareRegimes:
    def test_balances_and_advantage(self):
        result = compare_regimes(_totals(100_000), _totals(120_000), _gain(10_000), _gain(25_000))
        assert result.regime_a_total_balance == pytest.approx(90_000)
        assert result.regime_b_total_balance == pytest.approx(95_000)
        assert result.advantage == pytest.approx(5_000)
        assert result.favours_furnished

    def test_negative_advantage_favours_regulated(self):
        result = compare_regimes(_totals(100_000), _totals(80_000), _gain(0), _gain(0))
        assert result.advantage == pytest.approx(-20_000)
        assert not result.favours_furnished


class TestRunSimulation:
    """Tests for run_simulation and simulate."""

    def test_simulate_returns_comparison(self, reference_inputs):
        result = simulate(reference_inputs)
        assert isinstance(result, ComparativeResult)
        assert result.advantage == pytest.approx(
            result.regime_b_total_balance - result.regime_a_total_balance
        )

    def test_memoized_on_inputs(self, reference_inputs):
        """Equal inputs hit the cache and return the same report."""
        twin = SimulationInputs(**{
            name: getattr(reference_inputs, name) for name in SimulationInputs.model_fields
        })
        assert run_simulation(reference_inputs) is run_simulation(twin)

    def test_custom_law(self, deficit_inputs):
        """A higher deficit cap changes the regulated-rent result only."""
        base = run_simulation(deficit_inputs.model_copy(update={"annual_charges": 15_000}))
        law = TaxLawConfig(label="test", deficit_imputation_cap=20_000)
        custom = run_simulation(deficit_inputs.model_copy(update={"annual_charges": 15_000}), law)
        assert custom.tax_law_label == "test"
        assert custom.regime_a_totals.total_tax < base.regime_a_totals.total_tax
        assert custom.regime_b_totals == base.regime_b_totals

    def test_marginal_rates(self, reference_inputs):
        rates = run_simulation(reference_inputs).marginal_rates
        assert rates.before == 0.30
        assert rates.regime_a == 0.30
        assert rates.regime_b == 0.30
