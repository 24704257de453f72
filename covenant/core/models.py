"""Domain models for the Covenant contract ledger.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Generic, TypeAlias, TypeVar

# Fixed response texts. Hosting applications match on these verbatim.
CONTRACT_CREATED = "Contract Created Successfully"
PAYMENT_SCHEDULED = "Payment Schedule Added"
PAYMENT_SUCCESSFUL = "Payment Successful"
PAYMENT_WITH_PENALTY = "Payment received with penalty"
COMPLIANCE_VERIFIED = "Compliance verified"
NON_COMPLIANCE_LOGGED = "Non-compliance logged"
NON_COMPLIANCE_DETECTED = "Non-compliance detected"


@dataclass(frozen=True)
class Contract:
    """A tracked legal contract and its free-text status."""

    id: int
    status: str


@dataclass(frozen=True)
class PaymentSchedule:
    """The single pending payment for a contract.

    amount is in integer minor units; due_date is a timestamp in whatever
    monotonic unit the caller uses for current_time.
    """

    contract_id: int
    amount: int
    due_date: int


@dataclass(frozen=True)
class ComplianceViolation:
    """A recorded compliance failure for a contract."""

    contract_id: int
    violation: str = NON_COMPLIANCE_DETECTED


@dataclass(frozen=True)
class PaymentReceipt:
    """Outcome of a settled payment.

    penalty is None for on-time payments.
    """

    message: str
    penalty: int | None = None

    @property
    def is_late(self) -> bool:
        return self.penalty is not None


class FailureReason(Enum):
    """The recoverable error kinds a ledger operation can report."""

    CONTRACT_NOT_FOUND = "Contract Not Found"
    NO_PAYMENT_SCHEDULED = "No Payment Scheduled"


class LedgerOperationError(Exception):
    """Raised by Failure.unwrap() for callers that prefer exceptions."""

    def __init__(self, reason: FailureReason):
        super().__init__(reason.value)
        self.reason = reason


T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful ledger operation carrying its payload.

    The payload is a message string for most operations and a
    PaymentReceipt for pay().
    """

    value: T

    @property
    def ok(self) -> bool:
        return True

    @property
    def message(self) -> str:
        if isinstance(self.value, PaymentReceipt):
            return self.value.message
        return str(self.value)

    def unwrap(self) -> T:
        return self.value

    def to_dict(self) -> dict[str, Any]:
        """Render in the ledger's wire form, e.g. {"ok": {"message": ...}}."""
        if isinstance(self.value, PaymentReceipt):
            return {
                "ok": {
                    "message": self.value.message,
                    "penalty": self.value.penalty,
                }
            }
        return {"ok": {"message": self.message}}


@dataclass(frozen=True)
class Failure:
    """Failed ledger operation. Never raised, always returned."""

    reason: FailureReason

    @property
    def ok(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return self.reason.value

    def unwrap(self) -> Any:
        raise LedgerOperationError(self.reason)

    def to_dict(self) -> dict[str, Any]:
        return {"err": self.reason.value}


Result: TypeAlias = Success[T] | Failure


@dataclass(frozen=True)
class LedgerStats:
    """Point-in-time summary of a ledger's stores."""

    total_contracts: int
    by_status: Mapping[str, int]  # status -> count (immutable at runtime)
    scheduled_payments: int
    recorded_violations: int
    violation_count: int

    def __post_init__(self) -> None:
        """Convert mutable dict to an immutable proxy."""
        object.__setattr__(self, "by_status", MappingProxyType(dict(self.by_status)))
