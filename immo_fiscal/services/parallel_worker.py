"""
Parallel worker functions for what-if sweeps.

These are module-level functions designed to be pickle-safe for ProcessPoolExecutor.
"""
from typing import Any


def simulate_variant_worker(args: tuple) -> dict[str, Any]:
    """
    Worker function to simulate a single input variant.

    Args:
        args: Tuple of (inputs_payload, tax_law, field, value)

    Returns:
        Row dict with the swept value, both balances and the advantage
    """
    inputs_payload, tax_law, field, value = args

    # Import here so the worker process builds its own instances
    from immo_fiscal.core.simulation import simulate
    from immo_fiscal.domain.models.inputs import SimulationInputs

    inputs = SimulationInputs.model_validate({**inputs_payload, field: value})
    result = simulate(inputs, tax_law)
    return {
        field: value,
        "balance_regime_a": result.regime_a_total_balance,
        "balance_regime_b": result.regime_b_total_balance,
        "advantage": result.advantage,
    }


def simulate_batch_worker(args: tuple) -> list[dict[str, Any]]:
    """
    Worker function to simulate a batch of values for one field.

    This reduces IPC overhead by processing several variants per worker.

    Args:
        args: Tuple of (inputs_payload, tax_law, field, values)
    """
    inputs_payload, tax_law, field, values = args
    return [simulate_variant_worker((inputs_payload, tax_law, field, v)) for v in values]
