"""
immo_fiscal - Regulated-rent vs furnished-rental tax simulator

Compares the after-tax economics of a regulated-rent regime with
property amortization and a furnished-rental (LMNP réel) regime over a
holding period, including capital-gains tax at resale.

Modules:
    - domain.models: Pydantic inputs and result value objects
    - core: Tax law configuration, income tax, regimes, capital gains, simulation
    - services: What-if sweeps and result export
"""

__version__ = "1.2.0"
