"""Core domain logic for the Covenant contract ledger.

This package contains zero external dependencies and represents
the pure business logic of the application. All adapters and
external integrations are handled by the adapters package.
"""

from .ledger import ContractLedger
from .models import (
    ComplianceViolation,
    Contract,
    Failure,
    FailureReason,
    LedgerOperationError,
    LedgerStats,
    PaymentReceipt,
    PaymentSchedule,
    Result,
    Success,
)
from .penalty import PenaltyCalculator

__all__ = [
    "ComplianceViolation",
    "Contract",
    "ContractLedger",
    "Failure",
    "FailureReason",
    "LedgerOperationError",
    "LedgerStats",
    "PaymentReceipt",
    "PaymentSchedule",
    "PenaltyCalculator",
    "Result",
    "Success",
]
