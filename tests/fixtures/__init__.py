"""
Test Fixtures and Utilities

Synthetic ledgers for unit and integration tests: a small fixed ledger,
seeded random ledgers and helpers for writing ledger files.
"""
