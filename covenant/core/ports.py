"""Port interfaces for the Covenant contract ledger.

These abstract base classes define the boundary between the core
ledger and the adapters that host it. Implementations of the driving
port live in the core; adapters in the adapters/ package call into it.

Port Interface Categories:

1. **Driving Ports** (adapters/external systems call into core)
   - LedgerPort: Contract creation, payment scheduling and settlement,
     compliance checks, and read-only inspection of ledger state.

There are no driven ports: the ledger keeps its state in memory and
performs no I/O.
"""

from abc import ABC, abstractmethod

from .models import (
    ComplianceViolation,
    Contract,
    LedgerStats,
    PaymentReceipt,
    PaymentSchedule,
    Result,
    Success,
)


# ============================================================================
# DRIVING PORTS (External systems call into core)
# ============================================================================


class LedgerPort(ABC):
    """Port for operating on a contract ledger.

    Every mutating operation returns a Result instead of raising. The
    only failures are the ones enumerated in FailureReason; callers
    should branch on Result.ok rather than catching exceptions.

    Implementations must handle:
    - Atomic updates across the contract, schedule and violation stores
    - Consistent reads when shared between threads
    """

    @abstractmethod
    def create_contract(self, contract_id: int, status: str) -> Success[str]:
        """Create or overwrite a contract.

        Args:
            contract_id: Integer identifier, unique per contract.
            status: Free-text status. Not validated.

        Returns:
            Success("Contract Created Successfully"). Never fails.
        """

    @abstractmethod
    def set_payment(
        self, contract_id: int, amount: int, due_date: int
    ) -> Success[str]:
        """Create or replace the payment schedule for a contract.

        The contract does not need to exist, and neither amount nor
        due_date is validated.

        Args:
            contract_id: Contract the payment belongs to.
            amount: Amount due in integer minor units.
            due_date: Timestamp after which payment is late.

        Returns:
            Success("Payment Schedule Added"). Never fails.
        """

    @abstractmethod
    def pay(
        self, contract_id: int, amount: int, current_time: int
    ) -> Result[PaymentReceipt]:
        """Settle the scheduled payment for a contract.

        A payment strictly before the due date clears the schedule. A
        payment on or after the due date is charged a penalty computed
        from amount and leaves the schedule in place.

        Args:
            contract_id: Contract being paid.
            amount: Amount paid; only used to compute a late penalty.
            current_time: Payment timestamp, same unit as the due date.

        Returns:
            Success(PaymentReceipt) on settlement.
            Failure(CONTRACT_NOT_FOUND) if the contract does not exist.
            Failure(NO_PAYMENT_SCHEDULED) if no schedule exists.
        """

    @abstractmethod
    def check_compliance(self, contract_id: int, criteria: str) -> Result[str]:
        """Compare a contract's status with an expected value.

        A mismatch records a violation for the contract and increments
        the ledger-wide violation counter.

        Args:
            contract_id: Contract to check.
            criteria: Expected status, compared by exact equality.

        Returns:
            Success("Compliance verified") or Success("Non-compliance logged").
            Failure(CONTRACT_NOT_FOUND) if the contract does not exist.
        """

    @abstractmethod
    def get_contract(self, contract_id: int) -> Contract | None:
        """Retrieve a contract by ID, or None if it was never created."""

    @abstractmethod
    def get_payment_schedule(self, contract_id: int) -> PaymentSchedule | None:
        """Retrieve the pending payment schedule for a contract, if any."""

    @abstractmethod
    def get_violation(self, contract_id: int) -> ComplianceViolation | None:
        """Retrieve the recorded violation for a contract, if any."""

    @property
    @abstractmethod
    def violation_count(self) -> int:
        """Number of non-compliant checks since the ledger was created."""

    @abstractmethod
    def get_stats(self) -> LedgerStats:
        """Summarize the ledger's current contents."""
