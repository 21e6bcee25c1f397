"""What-if sweeps over a single simulation input.

Each variant is an independent simulation, so sweeps can be spread over
worker processes with no coordination.
"""

from __future__ import annotations

import math
from concurrent.futures import ProcessPoolExecutor
from typing import Any, Sequence

import numpy as np
import pandas as pd
from pydantic import ValidationError

from immo_fiscal.core.exceptions import InvalidParameterError, SimulationError
from immo_fiscal.core.logging import get_logger
from immo_fiscal.core.settings import get_settings
from immo_fiscal.core.tax_law import TAX_LAW_2025, TaxLawConfig
from immo_fiscal.domain.models.inputs import SimulationInputs
from immo_fiscal.services.parallel_worker import simulate_batch_worker

log = get_logger(__name__)


class SensitivitySweep:
    """Vary one field of a base scenario and compare both regimes per value."""

    def __init__(
        self,
        base_inputs: SimulationInputs,
        tax_law: TaxLawConfig = TAX_LAW_2025,
        max_workers: int | None = None,
    ):
        self.base_inputs = base_inputs
        self.tax_law = tax_law
        self.max_workers = max_workers or get_settings().sweep_max_workers

    def _payload(self) -> dict[str, Any]:
        return {
            name: getattr(self.base_inputs, name)
            for name in SimulationInputs.model_fields
        }

    def run(self, field: str, values: Sequence[Any]) -> pd.DataFrame:
        """Simulate the base scenario with ``field`` set to each of ``values``.

        Args:
            field: Name of a SimulationInputs field
            values: Values to try, in output order

        Returns:
            DataFrame with one row per value: the value, both balances and the advantage

        Raises:
            InvalidParameterError: Unknown field or a value rejected by the input model
            SimulationError: No values, or a worker process failed
        """
        if field not in SimulationInputs.model_fields:
            raise InvalidParameterError("field", field, "not a simulation input")
        values = list(values)
        if not values:
            raise SimulationError(f"Sweep over '{field}' has no values")
        payload = self._payload()

        try:
            for value in values:
                SimulationInputs.model_validate({**payload, field: value})
        except ValidationError as e:
            raise InvalidParameterError(field, value, "value rejected by input model") from e

        log.info("sweep_started", field=field, count=len(values), workers=self.max_workers)
        try:
            if self.max_workers <= 1:
                rows = simulate_batch_worker((payload, self.tax_law, field, values))
            else:
                size = math.ceil(len(values) / self.max_workers)
                args = [
                    (payload, self.tax_law, field, values[i:i + size])
                    for i in range(0, len(values), size)
                ]
                with ProcessPoolExecutor(max_workers=self.max_workers) as executor:
                    rows = [row for batch in executor.map(simulate_batch_worker, args) for row in batch]
        except (OSError, RuntimeError) as e:
            log.error("sweep_failed", field=field, error=str(e))
            raise SimulationError(f"Sweep over '{field}' failed: {e}") from e

        log.info("sweep_completed", field=field, count=len(rows))
        return pd.DataFrame(rows)

    def run_range(self, field: str, start: float, stop: float, num: int = 11) -> pd.DataFrame:
        """Sweep ``num`` evenly spaced values from ``start`` to ``stop`` inclusive."""
        if field not in SimulationInputs.model_fields:
            raise InvalidParameterError("field", field, "not a simulation input")
        values = np.linspace(start, stop, num)
        if SimulationInputs.model_fields[field].annotation is int:
            values = np.unique(np.round(values).astype(int))
        return self.run(field, [v.item() for v in values])

    @staticmethod
    def breakeven_rows(frame: pd.DataFrame) -> pd.DataFrame:
        """Rows where the advantage changes sign relative to the previous row."""
        signs = np.sign(frame["advantage"].to_numpy())
        flips = np.flatnonzero(signs[1:] != signs[:-1]) + 1
        return frame.iloc[flips]
