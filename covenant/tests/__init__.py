"""Test suite for the Covenant contract ledger.

Organized into categories:

1. core/: Unit tests for core domain logic
   - No external dependencies, fast execution

2. fakes/: Port implementations for testing
   - In-memory LedgerPort used by adapter tests

3. Top-level tests for the CLI adapter and composition root
"""
