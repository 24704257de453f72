"""External adapters for the Covenant contract ledger.

This package contains the hosting surfaces that drive the core
LedgerPort. The core itself performs no I/O.

Adapter Organization:

- cli/: Command-line interface for ledger operations
"""
