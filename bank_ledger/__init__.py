"""
Bank Ledger

Flat-file account ledger with pipe-delimited account records, an
append-only transaction journal, and Decimal-precise transfers.
"""

__version__ = "1.0.0"
