"""Custom exceptions for immo_fiscal.

Domain-specific exception types for better error handling and debugging.
"""

from __future__ import annotations

from typing import Any


class ImmoFiscalError(Exception):
    """Base exception for all immo_fiscal errors."""
    pass


# --- Calculation Errors ---

class SimulationError(ImmoFiscalError):
    """Error during fiscal simulation or a what-if sweep."""
    pass


class InvalidParameterError(ImmoFiscalError):
    """Invalid parameter value provided."""

    def __init__(self, param_name: str, value: Any, reason: str = ""):
        self.param_name = param_name
        self.value = value
        self.reason = reason
        msg = f"Invalid parameter '{param_name}': {value}"
        if reason:
            msg += f" - {reason}"
        super().__init__(msg)


# --- Configuration Errors ---

class ConfigurationError(ImmoFiscalError):
    """Inconsistent tax-law configuration (bracket or band tables)."""
    pass


# --- Export Errors ---

class ExportError(ImmoFiscalError):
    """Failed to write simulation results to disk."""
    pass
