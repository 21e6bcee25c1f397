"""Simulation input model.

One ``SimulationInputs`` instance describes a complete what-if scenario:
the property, its rent, the household and the holding period.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, computed_field


class RegimeLevel(str, Enum):
    """Regulated-rent tier."""

    INTERMEDIATE = "intermediate"
    SOCIAL = "social"
    VERY_SOCIAL = "very_social"


class SimulationInputs(BaseModel):
    """Validated, immutable scenario inputs.

    Frozen so that instances are hashable and can key the simulation cache.
    Regime eligibility (e.g. minimum renovation for existing builds) is not
    checked here.
    """

    # Property
    acquisition_price: float = Field(..., ge=0, description="Purchase price in €")
    property_is_new: bool = Field(default=True, description="New build (neuf) vs existing (ancien)")
    renovation_cost: float = Field(default=0.0, ge=0, description="Renovation cost in € (existing builds)")

    # Rent
    market_monthly_rent: float = Field(..., ge=0, description="Unregulated monthly rent in €")
    regime_level: RegimeLevel = Field(
        default=RegimeLevel.INTERMEDIATE, description="Regulated-rent tier"
    )
    annual_charges: float = Field(default=0.0, ge=0, description="Deductible annual charges in €")

    # Household
    household_taxable_income: float = Field(default=0.0, ge=0, description="Taxable income before rental in €")
    household_parts: float = Field(default=1.0, gt=0, description="Quotient familial parts")

    # Furnished rental
    furnished_amortization_rate_percent: float = Field(
        default=3.0, ge=0, description="Annual LMNP amortization rate in % of the basis"
    )

    # Horizon
    holding_years: int = Field(default=15, ge=1, description="Years held before resale")

    model_config = {
        "frozen": True,
        "extra": "forbid",
    }

    @computed_field
    @property
    def basis_value(self) -> float:
        """Amortizable and appreciating value: price, plus renovation for existing builds."""
        if self.property_is_new:
            return self.acquisition_price
        return self.acquisition_price + self.renovation_cost
