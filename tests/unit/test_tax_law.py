"""Unit tests for immo_fiscal.core.tax_law module."""

import math
from dataclasses import replace

import pytest

from immo_fiscal.core.exceptions import ConfigurationError, InvalidParameterError
from immo_fiscal.core.piecewise import SurtaxBand
from immo_fiscal.core.tax_law import (
    REGULATED_TIERS_2025,
    TAX_LAW_2025,
    TaxBracket,
    TaxLawConfig,
)
from immo_fiscal.domain.models import RegimeLevel


class TestDefaultLaw:
    """The 2025 tables as shipped."""

    def test_five_brackets_unbounded_top(self):
        assert len(TAX_LAW_2025.brackets) == 5
        assert math.isinf(TAX_LAW_2025.brackets[-1].upper_bound)

    def test_statutory_rates(self):
        assert TAX_LAW_2025.land_income_social_rate == 0.172
        assert TAX_LAW_2025.furnished_social_rate == 0.186
        assert TAX_LAW_2025.capital_gain_income_tax_rate == 0.19
        assert TAX_LAW_2025.deficit_imputation_cap == 10_700

    def test_surtax_table_has_eleven_segments(self):
        assert len(TAX_LAW_2025.surtax_bands) == 11

    def test_hashable(self):
        """Law versions take part in memoization keys."""
        assert hash(TAX_LAW_2025) == hash(TaxLawConfig())


class TestTierLookup:
    """Tests for TaxLawConfig.tier."""

    def test_intermediate(self):
        tier = TAX_LAW_2025.tier(RegimeLevel.INTERMEDIATE)
        assert tier.annual_amortization_cap == 8_000
        assert tier.rent_discount_fraction == 0.15
        assert tier.rate_for(property_is_new=True) == 0.035
        assert tier.rate_for(property_is_new=False) == 0.03

    def test_lookup_by_string_value(self):
        assert TAX_LAW_2025.tier("very_social").label == "Très social"

    def test_unknown_tier(self):
        with pytest.raises(InvalidParameterError):
            TAX_LAW_2025.tier("luxury")


class TestValidation:
    """Invalid tables fail at construction."""

    def test_unsorted_brackets(self):
        brackets = (TaxBracket(30_000, 0.11), TaxBracket(10_000, 0.0), TaxBracket(math.inf, 0.3))
        with pytest.raises(ConfigurationError, match="ascending"):
            TaxLawConfig(brackets=brackets)

    def test_decreasing_rates(self):
        brackets = (TaxBracket(10_000, 0.3), TaxBracket(math.inf, 0.1))
        with pytest.raises(ConfigurationError, match="non-decreasing"):
            TaxLawConfig(brackets=brackets)

    def test_bounded_top_bracket(self):
        brackets = (TaxBracket(10_000, 0.0), TaxBracket(50_000, 0.3))
        with pytest.raises(ConfigurationError, match="unbounded"):
            TaxLawConfig(brackets=brackets)

    def test_bounded_surtax_table(self):
        with pytest.raises(ConfigurationError, match="surtax"):
            TaxLawConfig(surtax_bands=(SurtaxBand(50_000, 0.0),))

    def test_duplicate_tiers(self):
        tiers = REGULATED_TIERS_2025 + (REGULATED_TIERS_2025[0],)
        with pytest.raises(ConfigurationError, match="distinct"):
            TaxLawConfig(regulated_tiers=tiers)

    def test_replace_revalidates(self):
        """Deriving a new law version goes through the same checks."""
        law = replace(TAX_LAW_2025, label="2026", deficit_imputation_cap=21_400)
        assert law.deficit_imputation_cap == 21_400
        with pytest.raises(ConfigurationError):
            replace(TAX_LAW_2025, brackets=())
