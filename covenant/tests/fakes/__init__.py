"""Fake/mock implementations of core ports for testing.

- FakeLedgerPort: Canned ledger results with call tracking
"""

from .ledger import FakeLedgerPort

__all__ = ["FakeLedgerPort"]
