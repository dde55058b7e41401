"""
Command Line Interface Package

Command Structure:
- messledger: Main entry point with utility commands (version, config)
- messledger settle: Settle one month from a ledger file
- messledger months: List months that have data
- messledger validate: Check a ledger file for data problems
"""
