"""Peptide suggestions API with a daily analytics ledger."""

__version__ = "1.0.0"
