"""
Wallet Tracker - Source Package

An interactive command-line ledger that records deposits and withdrawals
against wallet identifiers for the duration of one session.

DESIGN PRINCIPLES:
1. The ledger is append-only; nothing is ever edited or removed
2. Balances are replayed from history, never cached
3. Fail early, fail visibly
4. Every step must be auditable
"""

__version__ = "1.0.0"
__author__ = "Wallet Tracker Team"
