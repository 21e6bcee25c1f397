"""Annual regime calculators.

Both regimes follow the same yearly step: rent, amortization, taxable
result, income-tax delta and social levy. They differ only in how
amortization is bounded and what is carried to the next year, which is
captured by ``CarryForwardPolicy``.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from immo_fiscal.core.income_tax import deficit_tax_saving, income_tax_delta
from immo_fiscal.core.tax_law import TAX_LAW_2025, RegimeLevelConfig, TaxLawConfig
from immo_fiscal.domain.models.inputs import SimulationInputs
from immo_fiscal.domain.models.results import AnnualResult


class CarryForwardPolicy(str, Enum):
    """What a regime carries from one year to the next."""

    # Déficit foncier: imputable up to a cap, excess carried forward
    CAP_WITH_DEFICIT_CARRYFORWARD = "cap_with_deficit_carryforward"
    # BIC: amortization limited to the operating result, remainder carried forward
    CAP_BY_OPERATING_RESULT_WITH_AMORTIZATION_CARRYFORWARD = (
        "cap_by_operating_result_with_amortization_carryforward"
    )


@dataclass(frozen=True)
class RegimeState:
    """Running accumulators threaded from one year to the next."""

    remaining_amortizable_base: float
    carry_forward: float = 0.0


def round_half_up(value: float) -> float:
    """Round to the nearest euro, halves away from zero for positive amounts."""
    return float(math.floor(value + 0.5))


class RegimeCalculator(ABC):
    """One regime's yearly tax computation."""

    policy: CarryForwardPolicy
    name: str

    def __init__(self, inputs: SimulationInputs, law: TaxLawConfig = TAX_LAW_2025):
        self.inputs = inputs
        self.law = law

    @property
    @abstractmethod
    def annual_rent(self) -> float:
        """Gross annual rent collected under this regime."""

    @property
    @abstractmethod
    def amortizable_base(self) -> float:
        """Total amortizable value at acquisition."""

    @property
    @abstractmethod
    def nominal_amortization(self) -> float:
        """Yearly amortization before exhaustion and carry-forward rules."""

    def initial_state(self) -> RegimeState:
        return RegimeState(remaining_amortizable_base=self.amortizable_base)

    @abstractmethod
    def step(self, year: int, state: RegimeState) -> tuple[AnnualResult, RegimeState]:
        """Compute one year and return it with the state for the next year."""

    def _income_tax_delta(self, taxable: float) -> float:
        if taxable <= 0:
            return 0.0
        return income_tax_delta(
            self.inputs.household_taxable_income,
            taxable,
            self.inputs.household_parts,
            self.law.brackets,
        )


class RegulatedRentRegime(RegimeCalculator):
    """Regime A: regulated rent, capped amortization, land-income deficit."""

    policy = CarryForwardPolicy.CAP_WITH_DEFICIT_CARRYFORWARD
    name = "regulated_rent"

    @property
    def tier(self) -> RegimeLevelConfig:
        return self.law.tier(self.inputs.regime_level)

    @property
    def annual_rent(self) -> float:
        discounted = self.inputs.market_monthly_rent * (1 - self.tier.rent_discount_fraction)
        return round_half_up(discounted) * 12

    @property
    def amortizable_base(self) -> float:
        return self.inputs.basis_value * self.law.regulated_amortizable_share

    @property
    def nominal_amortization(self) -> float:
        computed = self.amortizable_base * self.tier.rate_for(self.inputs.property_is_new)
        return min(computed, self.tier.annual_amortization_cap)

    def step(self, year: int, state: RegimeState) -> tuple[AnnualResult, RegimeState]:
        rent = self.annual_rent
        charges = self.inputs.annual_charges
        amortization = min(self.nominal_amortization, state.remaining_amortizable_base)
        remaining = max(0.0, state.remaining_amortizable_base - amortization)
        carried_deficit = state.carry_forward

        net = rent - charges - amortization
        if net > 0 and carried_deficit > 0:
            absorbed = min(net, carried_deficit)
            net -= absorbed
            carried_deficit -= absorbed

        imputed = 0.0
        if net >= 0:
            ir_delta = self._income_tax_delta(net)
            social = net * self.law.land_income_social_rate
        else:
            # Excess over the imputation cap is carried forward without expiry
            imputed = min(-net, self.law.deficit_imputation_cap)
            carried_deficit += -net - imputed
            ir_delta = -deficit_tax_saving(
                self.inputs.household_taxable_income,
                imputed,
                self.inputs.household_parts,
                self.law.brackets,
            )
            social = 0.0

        total_tax = ir_delta + social
        result = AnnualResult(
            year=year,
            gross_rent=rent,
            charges=charges,
            amortization_computed=amortization,
            amortization_deducted=amortization,
            taxable_net_income_or_deficit=net,
            imputed_deficit=imputed,
            income_tax_delta=ir_delta,
            social_levy=social,
            total_tax=total_tax,
            net_income=rent - charges - total_tax,
            carry_forward_balance=carried_deficit,
            remaining_amortizable_base=remaining,
        )
        return result, RegimeState(remaining, carried_deficit)


class FurnishedRentalRegime(RegimeCalculator):
    """Regime B: furnished rental (LMNP réel), amortization carried forward."""

    policy = CarryForwardPolicy.CAP_BY_OPERATING_RESULT_WITH_AMORTIZATION_CARRYFORWARD
    name = "furnished_rental"

    @property
    def annual_rent(self) -> float:
        return self.inputs.market_monthly_rent * 12

    @property
    def amortizable_base(self) -> float:
        return self.inputs.basis_value

    @property
    def nominal_amortization(self) -> float:
        return self.amortizable_base * (self.inputs.furnished_amortization_rate_percent / 100.0)

    def step(self, year: int, state: RegimeState) -> tuple[AnnualResult, RegimeState]:
        rent = self.annual_rent
        charges = self.inputs.annual_charges
        new_amortization = min(self.nominal_amortization, state.remaining_amortizable_base)
        remaining = max(0.0, state.remaining_amortizable_base - new_amortization)
        available = new_amortization + state.carry_forward

        operating = rent - charges
        deducted = min(available, operating) if operating > 0 else 0.0
        carried = available - deducted
        taxable = max(0.0, operating - deducted)

        ir_delta = self._income_tax_delta(taxable)
        social = taxable * self.law.furnished_social_rate
        total_tax = ir_delta + social
        result = AnnualResult(
            year=year,
            gross_rent=rent,
            charges=charges,
            amortization_computed=new_amortization,
            amortization_deducted=deducted,
            taxable_net_income_or_deficit=taxable,
            imputed_deficit=0.0,
            income_tax_delta=ir_delta,
            social_levy=social,
            total_tax=total_tax,
            net_income=rent - charges - total_tax,
            carry_forward_balance=carried,
            remaining_amortizable_base=remaining,
        )
        return result, RegimeState(remaining, carried)


def regime_calculator(
    policy: CarryForwardPolicy,
    inputs: SimulationInputs,
    law: TaxLawConfig = TAX_LAW_2025,
) -> RegimeCalculator:
    """Build the calculator implementing ``policy``."""
    if policy is CarryForwardPolicy.CAP_WITH_DEFICIT_CARRYFORWARD:
        return RegulatedRentRegime(inputs, law)
    return FurnishedRentalRegime(inputs, law)
