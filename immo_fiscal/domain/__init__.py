"""Domain models for immo_fiscal."""
