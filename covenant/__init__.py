"""Covenant: an embeddable contract lifecycle ledger.

- core/: Domain models, penalty rules and the ContractLedger service
- adapters/: Hosting surfaces that drive the ledger (CLI)
"""
