"""Capital-gains tax at resale.

Holding-period abatements, the high-gain surtax and the per-regime
calculation including reintegration of deducted amortization.
"""

from __future__ import annotations

from immo_fiscal.core.piecewise import evaluate_abatement, evaluate_bands
from immo_fiscal.core.regimes import round_half_up
from immo_fiscal.core.tax_law import TAX_LAW_2025, TaxLawConfig
from immo_fiscal.domain.models.inputs import SimulationInputs
from immo_fiscal.domain.models.results import CapitalGainResult, ResaleBasis


def income_tax_abatement(holding_years: int, law: TaxLawConfig = TAX_LAW_2025) -> float:
    """Income-tax abatement fraction: 6 %/year from year 6, full exemption at 22."""
    return evaluate_abatement(law.income_tax_abatement, holding_years)


def social_levy_abatement(holding_years: int, law: TaxLawConfig = TAX_LAW_2025) -> float:
    """Social-levy abatement fraction: 1.65 %/year from year 6, +1.6 pt at 22, 9 %/year after, full at 30."""
    return evaluate_abatement(law.social_levy_abatement, holding_years)


def capital_gain_surtax(taxable_gain: float, law: TaxLawConfig = TAX_LAW_2025) -> float:
    """Surtax on the income-tax base of a large capital gain (0 up to 50,000 €)."""
    return evaluate_bands(law.surtax_bands, taxable_gain)


class CapitalGainCalculator:
    """Capital-gains tax for a resale after ``inputs.holding_years``.

    The resale basis is common to both regimes; each regime then adds back
    the amortization it deducted during the holding period.
    """

    def __init__(self, inputs: SimulationInputs, law: TaxLawConfig = TAX_LAW_2025):
        self.inputs = inputs
        self.law = law

    def resale_basis(self) -> ResaleBasis:
        """Projected resale price and corrected acquisition cost."""
        inputs, law = self.inputs, self.law
        years = inputs.holding_years

        resale_price = round_half_up(
            inputs.basis_value * (1 + law.annual_appreciation_rate) ** years
        )
        notarial_fees = inputs.acquisition_price * law.notarial_fee_allowance

        actual_works = 0.0 if inputs.property_is_new else inputs.renovation_cost
        if years > law.renovation_allowance_min_years:
            flat_works = inputs.acquisition_price * law.renovation_flat_allowance
            renovation_allowance = max(actual_works, flat_works)
        else:
            renovation_allowance = actual_works

        return ResaleBasis(
            resale_price=resale_price,
            notarial_fees=notarial_fees,
            renovation_allowance=renovation_allowance,
            corrected_acquisition_cost=inputs.acquisition_price + notarial_fees + renovation_allowance,
        )

    def calculate(
        self,
        reintegrated_amortization: float,
        basis: ResaleBasis | None = None,
    ) -> CapitalGainResult:
        """Capital-gains tax for a regime that deducted ``reintegrated_amortization``.

        Args:
            reintegrated_amortization: Cumulative amortization deducted over the holding period
            basis: Precomputed resale basis (computed when omitted)

        Returns:
            CapitalGainResult with bases, abatements and taxes due
        """
        basis = basis or self.resale_basis()
        years = self.inputs.holding_years
        gain_before = basis.gross_gain_before_reintegration
        gross_gain = gain_before + reintegrated_amortization
        abatement_ir = income_tax_abatement(years, self.law)
        abatement_ps = social_levy_abatement(years, self.law)

        if gross_gain <= 0:
            return CapitalGainResult(
                gross_gain_before_reintegration=gain_before,
                reintegrated_amortization=reintegrated_amortization,
                gross_gain=gross_gain,
                abatement_income_tax_fraction=abatement_ir,
                abatement_social_fraction=abatement_ps,
                taxable_gain_income_tax_base=0.0,
                taxable_gain_social_base=0.0,
                income_tax_due=0.0,
                social_levy_due=0.0,
                surtax_due=0.0,
                total_tax_due=0.0,
            )

        base_ir = gross_gain * (1 - abatement_ir)
        base_ps = gross_gain * (1 - abatement_ps)
        income_tax = base_ir * self.law.capital_gain_income_tax_rate
        social = base_ps * self.law.capital_gain_social_rate
        surtax = capital_gain_surtax(base_ir, self.law)

        return CapitalGainResult(
            gross_gain_before_reintegration=gain_before,
            reintegrated_amortization=reintegrated_amortization,
            gross_gain=gross_gain,
            abatement_income_tax_fraction=abatement_ir,
            abatement_social_fraction=abatement_ps,
            taxable_gain_income_tax_base=base_ir,
            taxable_gain_social_base=base_ps,
            income_tax_due=income_tax,
            social_levy_due=social,
            surtax_due=surtax,
            total_tax_due=income_tax + social + surtax,
        )
