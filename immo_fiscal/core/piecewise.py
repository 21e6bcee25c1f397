"""Generic piecewise evaluators for statutory schedules.

Two shapes cover every schedule the simulator needs:

- Band tables: ordered ``(upper_bound, rate, smoothing_anchor,
  smoothing_coefficient)`` rows. The first band whose upper bound is at
  least the amount applies ``rate * amount - (anchor - amount) * coefficient``.
- Holding-period accrual schedules: per-year accruals over bounded year
  ranges, flat bonuses from a given year, and a full-exemption year.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class SurtaxBand:
    """One segment of a smoothed band table."""

    upper_bound: float
    rate: float
    smoothing_anchor: float = 0.0
    smoothing_coefficient: float = 0.0

    def apply(self, amount: float) -> float:
        levy = self.rate * amount
        if self.smoothing_coefficient:
            levy -= (self.smoothing_anchor - amount) * self.smoothing_coefficient
        return levy


@dataclass(frozen=True)
class AccrualStep:
    """Accrue ``rate_per_year`` for each year beyond ``after_year``, up to ``max_years``."""

    after_year: int
    max_years: int
    rate_per_year: float

    def accrued(self, years: int) -> float:
        span = min(max(years - self.after_year, 0), self.max_years)
        return span * self.rate_per_year


@dataclass(frozen=True)
class FlatBonus:
    """Flat amount granted once the holding period reaches ``from_year``."""

    from_year: int
    amount: float


@dataclass(frozen=True)
class HoldingAbatementSchedule:
    """Abatement fraction as a function of whole years of detention."""

    accruals: tuple[AccrualStep, ...]
    full_exemption_year: int
    bonuses: tuple[FlatBonus, ...] = ()


def evaluate_bands(bands: Sequence[SurtaxBand], amount: float) -> float:
    """Evaluate a smoothed band table at ``amount``.

    Amounts at or below zero yield 0. Amounts above every finite bound fall
    into the last band, which must be unbounded.
    """
    if amount <= 0:
        return 0.0
    for band in bands:
        if amount <= band.upper_bound:
            return band.apply(amount)
    return bands[-1].apply(amount)


def evaluate_abatement(schedule: HoldingAbatementSchedule, years: int) -> float:
    """Evaluate a holding-period abatement schedule, clamped to [0, 1]."""
    if years >= schedule.full_exemption_year:
        return 1.0
    fraction = sum(step.accrued(years) for step in schedule.accruals)
    fraction += sum(b.amount for b in schedule.bonuses if years >= b.from_year)
    return min(max(fraction, 0.0), 1.0)


def validate_bands(bands: Sequence[SurtaxBand]) -> list[str]:
    """Return problems found in a band table (empty when consistent)."""
    problems: list[str] = []
    if not bands:
        return ["band table is empty"]
    bounds = [b.upper_bound for b in bands]
    if any(later <= earlier for earlier, later in zip(bounds, bounds[1:])):
        problems.append("band upper bounds must be strictly ascending")
    if not math.isinf(bounds[-1]):
        problems.append("last band must be unbounded")
    return problems
