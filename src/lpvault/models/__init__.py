"""Data models for decoded vault records.

This module provides typed Python classes for the records found in a
vault blob: accounts and equivalent domains.
"""

from .account import Account, EquivalentDomain

__all__ = [
    "Account",
    "EquivalentDomain",
]
