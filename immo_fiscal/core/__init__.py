"""Core tax engines and simulation."""

from .exceptions import (
    ConfigurationError,
    ExportError,
    ImmoFiscalError,
    InvalidParameterError,
    SimulationError,
)
from .tax_law import (
    TAX_LAW_2025,
    RegimeLevelConfig,
    TaxBracket,
    TaxLawConfig,
)
from .income_tax import calculate_income_tax, marginal_rate
from .capital_gains import (
    CapitalGainCalculator,
    capital_gain_surtax,
    income_tax_abatement,
    social_levy_abatement,
)
from .regimes import (
    CarryForwardPolicy,
    FurnishedRentalRegime,
    RegimeCalculator,
    RegimeState,
    RegulatedRentRegime,
)
from .simulation import (
    MultiYearSimulator,
    compare_regimes,
    run_simulation,
    simulate,
)

__all__ = [
    "TAX_LAW_2025",
    "TaxLawConfig",
    "TaxBracket",
    "RegimeLevelConfig",
    "calculate_income_tax",
    "marginal_rate",
    "income_tax_abatement",
    "social_levy_abatement",
    "capital_gain_surtax",
    "CapitalGainCalculator",
    "CarryForwardPolicy",
    "RegimeCalculator",
    "RegimeState",
    "RegulatedRentRegime",
    "FurnishedRentalRegime",
    "MultiYearSimulator",
    "compare_regimes",
    "run_simulation",
    "simulate",
    # Exceptions
    "ImmoFiscalError",
    "SimulationError",
    "InvalidParameterError",
    "ConfigurationError",
    "ExportError",
]
