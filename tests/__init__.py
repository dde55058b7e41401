"""
Test Suite for the Mess Ledger

Test Structure:
- fixtures/: Synthetic ledgers and record builders
- unit/: Unit tests mirroring src/ package structure
- integration/: CLI and configuration tests

All member names, phone numbers and amounts in the tests are made up.
"""
