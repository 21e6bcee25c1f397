"""Progressive income tax.

Quotient-based computation over the bracket table of a ``TaxLawConfig``.
"""

from __future__ import annotations

from typing import Sequence

from immo_fiscal.core.exceptions import InvalidParameterError
from immo_fiscal.core.tax_law import TAX_LAW_2025, TaxBracket


def _check_parts(parts: float) -> None:
    if parts <= 0:
        raise InvalidParameterError("parts", parts, "household parts must be > 0")


def calculate_income_tax(
    income: float,
    parts: float = 1,
    brackets: Sequence[TaxBracket] = TAX_LAW_2025.brackets,
) -> float:
    """Calculate progressive income tax.

    Each bracket taxes only the slice of the per-part quotient falling
    within its bounds; the per-part tax is then multiplied back by ``parts``.

    Args:
        income: Household taxable income in € (0 or less yields no tax)
        parts: Household parts (quotient familial divisor)
        brackets: Ascending bracket table

    Returns:
        Income tax in €

    Raises:
        InvalidParameterError: If ``parts`` is not strictly positive.
    """
    _check_parts(parts)
    if income <= 0:
        return 0.0

    quotient = income / parts
    tax = 0.0
    floor = 0.0
    for bracket in brackets:
        if quotient > floor:
            tax += (min(quotient, bracket.upper_bound) - floor) * bracket.rate
        floor = bracket.upper_bound
    return tax * parts


def marginal_rate(
    income: float,
    parts: float = 1,
    brackets: Sequence[TaxBracket] = TAX_LAW_2025.brackets,
) -> float:
    """Return the marginal bracket rate (TMI) for ``income``.

    Diagnostic only; tax amounts always come from ``calculate_income_tax``.
    """
    _check_parts(parts)
    if income <= 0:
        return 0.0

    quotient = income / parts
    for bracket in brackets:
        if quotient <= bracket.upper_bound:
            return bracket.rate
    return brackets[-1].rate


def income_tax_delta(
    base_income: float,
    additional_income: float,
    parts: float = 1,
    brackets: Sequence[TaxBracket] = TAX_LAW_2025.brackets,
) -> float:
    """Extra income tax caused by ``additional_income`` on top of ``base_income``."""
    return (
        calculate_income_tax(base_income + additional_income, parts, brackets)
        - calculate_income_tax(base_income, parts, brackets)
    )


def deficit_tax_saving(
    base_income: float,
    imputed_deficit: float,
    parts: float = 1,
    brackets: Sequence[TaxBracket] = TAX_LAW_2025.brackets,
) -> float:
    """Income tax saved by imputing ``imputed_deficit`` on ``base_income`` (>= 0)."""
    reduced = max(0.0, base_income - imputed_deficit)
    return (
        calculate_income_tax(base_income, parts, brackets)
        - calculate_income_tax(reduced, parts, brackets)
    )
