"""
Bank statement import for a personal-finance ledger.
"""
__version__ = "1.0.0"
