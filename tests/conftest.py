"""Pytest fixtures for immo_fiscal tests."""

import os
import sys

import pytest

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from immo_fiscal.domain.models import RegimeLevel, SimulationInputs  # noqa: E402


@pytest.fixture
def reference_inputs():
    """New build, intermediate tier, 15-year holding."""
    return SimulationInputs(
        acquisition_price=200_000,
        property_is_new=True,
        renovation_cost=0,
        market_monthly_rent=800,
        regime_level=RegimeLevel.INTERMEDIATE,
        household_taxable_income=35_000,
        household_parts=1,
        annual_charges=2_400,
        furnished_amortization_rate_percent=3.0,
        holding_years=15,
    )


@pytest.fixture
def deficit_inputs():
    """Existing build in the very-social tier: regulated rent runs a land deficit."""
    return SimulationInputs(
        acquisition_price=100_000,
        property_is_new=False,
        renovation_cost=100_000,
        market_monthly_rent=800,
        regime_level=RegimeLevel.VERY_SOCIAL,
        household_taxable_income=35_000,
        annual_charges=2_400,
        furnished_amortization_rate_percent=3.0,
        holding_years=10,
    )
