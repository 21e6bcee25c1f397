"""Tax-law configuration.

Every statutory rate, cap and table used by the simulator lives in a
``TaxLawConfig``. A new fiscal year is a new instance; the algorithms in
``income_tax``, ``regimes`` and ``capital_gains`` only read from it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from immo_fiscal.core.exceptions import ConfigurationError, InvalidParameterError
from immo_fiscal.core.piecewise import (
    AccrualStep,
    FlatBonus,
    HoldingAbatementSchedule,
    SurtaxBand,
    validate_bands,
)
from immo_fiscal.domain.models.inputs import RegimeLevel


@dataclass(frozen=True)
class TaxBracket:
    """Income-tax bracket: ``rate`` applies up to ``upper_bound`` per part."""

    upper_bound: float
    rate: float


@dataclass(frozen=True)
class RegimeLevelConfig:
    """Amortization and rent parameters of one regulated-rent tier."""

    level: RegimeLevel
    new_build_rate: float
    existing_build_rate: float
    annual_amortization_cap: float
    rent_discount_fraction: float
    label: str

    def rate_for(self, property_is_new: bool) -> float:
        return self.new_build_rate if property_is_new else self.existing_build_rate


# Barème 2025 (revenus 2024), one part
BRACKETS_2025: tuple[TaxBracket, ...] = (
    TaxBracket(11_497, 0.0),
    TaxBracket(29_315, 0.11),
    TaxBracket(83_823, 0.30),
    TaxBracket(180_294, 0.41),
    TaxBracket(math.inf, 0.45),
)

REGULATED_TIERS_2025: tuple[RegimeLevelConfig, ...] = (
    RegimeLevelConfig(RegimeLevel.INTERMEDIATE, 0.035, 0.030, 8_000, 0.15, "Intermédiaire"),
    RegimeLevelConfig(RegimeLevel.SOCIAL, 0.045, 0.035, 10_000, 0.30, "Social"),
    RegimeLevelConfig(RegimeLevel.VERY_SOCIAL, 0.055, 0.040, 12_000, 0.45, "Très social"),
)

# Abattement pour durée de détention, impôt sur le revenu (exonération à 22 ans)
INCOME_TAX_ABATEMENT_2025 = HoldingAbatementSchedule(
    accruals=(AccrualStep(after_year=5, max_years=16, rate_per_year=0.06),),
    full_exemption_year=22,
)

# Abattement pour durée de détention, prélèvements sociaux (exonération à 30 ans)
SOCIAL_LEVY_ABATEMENT_2025 = HoldingAbatementSchedule(
    accruals=(
        AccrualStep(after_year=5, max_years=16, rate_per_year=0.0165),
        AccrualStep(after_year=22, max_years=8, rate_per_year=0.09),
    ),
    bonuses=(FlatBonus(from_year=22, amount=0.016),),
    full_exemption_year=30,
)

# Taxe sur les plus-values immobilières élevées (CGI art. 1609 nonies G)
SURTAX_BANDS_2025: tuple[SurtaxBand, ...] = (
    SurtaxBand(50_000, 0.0),
    SurtaxBand(60_000, 0.02, 60_000, 1 / 20),
    SurtaxBand(100_000, 0.02),
    SurtaxBand(110_000, 0.03, 110_000, 1 / 10),
    SurtaxBand(150_000, 0.03),
    SurtaxBand(160_000, 0.04, 160_000, 0.15),
    SurtaxBand(200_000, 0.04),
    SurtaxBand(210_000, 0.05, 210_000, 0.20),
    SurtaxBand(250_000, 0.05),
    SurtaxBand(260_000, 0.06, 260_000, 0.25),
    SurtaxBand(math.inf, 0.06),
)


@dataclass(frozen=True)
class TaxLawConfig:
    """One version of the tax law.

    Instances are hashable so they can take part in memoization keys.
    Inconsistent tables raise ``ConfigurationError`` at construction.
    """

    label: str = "2025"
    brackets: tuple[TaxBracket, ...] = BRACKETS_2025
    regulated_tiers: tuple[RegimeLevelConfig, ...] = REGULATED_TIERS_2025

    # Annual taxation
    land_income_social_rate: float = 0.172
    furnished_social_rate: float = 0.186
    deficit_imputation_cap: float = 10_700.0
    regulated_amortizable_share: float = 0.80

    # Resale
    annual_appreciation_rate: float = 0.016
    notarial_fee_allowance: float = 0.075
    renovation_flat_allowance: float = 0.15
    renovation_allowance_min_years: int = 5
    capital_gain_income_tax_rate: float = 0.19
    capital_gain_social_rate: float = 0.172
    income_tax_abatement: HoldingAbatementSchedule = INCOME_TAX_ABATEMENT_2025
    social_levy_abatement: HoldingAbatementSchedule = SOCIAL_LEVY_ABATEMENT_2025
    surtax_bands: tuple[SurtaxBand, ...] = SURTAX_BANDS_2025

    def __post_init__(self) -> None:
        problems = _bracket_problems(self.brackets)
        problems += [f"surtax: {p}" for p in validate_bands(self.surtax_bands)]
        levels = [t.level for t in self.regulated_tiers]
        if len(set(levels)) != len(levels):
            problems.append("regulated tiers must have distinct levels")
        if problems:
            raise ConfigurationError(
                f"Invalid tax law '{self.label}': " + "; ".join(problems)
            )

    def tier(self, level: RegimeLevel | str) -> RegimeLevelConfig:
        """Look up a regulated-rent tier by level."""
        for config in self.regulated_tiers:
            if config.level == level:
                return config
        raise InvalidParameterError("regime_level", level, "unknown regulated-rent tier")


def _bracket_problems(brackets: tuple[TaxBracket, ...]) -> list[str]:
    if not brackets:
        return ["bracket table is empty"]
    problems = []
    bounds = [b.upper_bound for b in brackets]
    rates = [b.rate for b in brackets]
    if any(later <= earlier for earlier, later in zip(bounds, bounds[1:])):
        problems.append("bracket upper bounds must be strictly ascending")
    if any(later < earlier for earlier, later in zip(rates, rates[1:])):
        problems.append("bracket rates must be non-decreasing")
    if not math.isinf(bounds[-1]):
        problems.append("last bracket must be unbounded")
    return problems


TAX_LAW_2025 = TaxLawConfig()
