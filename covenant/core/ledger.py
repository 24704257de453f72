"""Contract ledger: implements LedgerPort over in-memory stores.

This is the core service of the package. It owns the contract,
payment schedule and compliance violation stores plus the violation
counter, and derives every result purely from their current contents
and the explicit arguments of each call. No wall clock is read: the
caller passes the current time to pay().
"""

import logging
import threading

from .models import (
    COMPLIANCE_VERIFIED,
    CONTRACT_CREATED,
    NON_COMPLIANCE_DETECTED,
    NON_COMPLIANCE_LOGGED,
    PAYMENT_SCHEDULED,
    PAYMENT_SUCCESSFUL,
    PAYMENT_WITH_PENALTY,
    ComplianceViolation,
    Contract,
    Failure,
    FailureReason,
    LedgerStats,
    PaymentReceipt,
    PaymentSchedule,
    Result,
    Success,
)
from .penalty import PenaltyCalculator
from .ports import LedgerPort

logger = logging.getLogger(__name__)


class ContractLedger(LedgerPort):
    """Core implementation of LedgerPort.

    Each instance is an independent ledger; stores are created empty and
    live as long as the instance. A single re-entrant lock serializes
    all operations, so an instance can be shared between threads.

    Note: a late payment leaves the schedule in place, so repeating it
    charges the penalty again. set_payment() also accepts contract IDs
    that have no contract.
    """

    def __init__(self, penalty_calculator: PenaltyCalculator | None = None):
        """Initialize an empty ledger.

        Args:
            penalty_calculator: Late-payment rules. Defaults to a flat 10%.
        """
        self.penalty_calculator = penalty_calculator or PenaltyCalculator()
        self._contracts: dict[int, Contract] = {}
        self._schedules: dict[int, PaymentSchedule] = {}
        self._violations: dict[int, ComplianceViolation] = {}
        self._violation_count = 0
        self._lock = threading.RLock()

    def create_contract(self, contract_id: int, status: str) -> Success[str]:
        with self._lock:
            self._contracts[contract_id] = Contract(id=contract_id, status=status)

        logger.info(
            f"Contract {contract_id} created",
            extra={"contract_id": contract_id, "status": status},
        )
        return Success(CONTRACT_CREATED)

    def set_payment(
        self, contract_id: int, amount: int, due_date: int
    ) -> Success[str]:
        with self._lock:
            self._schedules[contract_id] = PaymentSchedule(
                contract_id=contract_id, amount=amount, due_date=due_date
            )

        logger.info(
            f"Payment scheduled for contract {contract_id}",
            extra={
                "contract_id": contract_id,
                "amount": amount,
                "due_date": due_date,
            },
        )
        return Success(PAYMENT_SCHEDULED)

    def pay(
        self, contract_id: int, amount: int, current_time: int
    ) -> Result[PaymentReceipt]:
        with self._lock:
            if contract_id not in self._contracts:
                return self._fail(contract_id, FailureReason.CONTRACT_NOT_FOUND)

            schedule = self._schedules.get(contract_id)
            if schedule is None:
                return self._fail(contract_id, FailureReason.NO_PAYMENT_SCHEDULED)

            if self.penalty_calculator.is_late(schedule, current_time):
                penalty = self.penalty_calculator.compute(amount)
                receipt = PaymentReceipt(message=PAYMENT_WITH_PENALTY, penalty=penalty)
            else:
                del self._schedules[contract_id]
                receipt = PaymentReceipt(message=PAYMENT_SUCCESSFUL)

        context = {
            "contract_id": contract_id,
            "amount": amount,
            "current_time": current_time,
            "due_date": schedule.due_date,
            "penalty": receipt.penalty,
        }
        if receipt.is_late:
            logger.info(
                f"Late payment received for contract {contract_id}, penalty {receipt.penalty}",
                extra=context,
            )
        else:
            logger.info(
                f"On-time payment received for contract {contract_id}, schedule cleared",
                extra=context,
            )
        return Success(receipt)

    def check_compliance(self, contract_id: int, criteria: str) -> Result[str]:
        with self._lock:
            contract = self._contracts.get(contract_id)
            if contract is None:
                return self._fail(contract_id, FailureReason.CONTRACT_NOT_FOUND)

            if contract.status == criteria:
                logger.debug(
                    f"Contract {contract_id} is compliant",
                    extra={"contract_id": contract_id, "criteria": criteria},
                )
                return Success(COMPLIANCE_VERIFIED)

            self._violations[contract_id] = ComplianceViolation(
                contract_id=contract_id, violation=NON_COMPLIANCE_DETECTED
            )
            self._violation_count += 1
            count = self._violation_count

        logger.warning(
            f"Non-compliance detected for contract {contract_id}",
            extra={
                "contract_id": contract_id,
                "status": contract.status,
                "criteria": criteria,
                "violation_count": count,
            },
        )
        return Success(NON_COMPLIANCE_LOGGED)

    def get_contract(self, contract_id: int) -> Contract | None:
        with self._lock:
            return self._contracts.get(contract_id)

    def get_payment_schedule(self, contract_id: int) -> PaymentSchedule | None:
        with self._lock:
            return self._schedules.get(contract_id)

    def get_violation(self, contract_id: int) -> ComplianceViolation | None:
        with self._lock:
            return self._violations.get(contract_id)

    @property
    def violation_count(self) -> int:
        with self._lock:
            return self._violation_count

    def get_stats(self) -> LedgerStats:
        with self._lock:
            status_counts: dict[str, int] = {}
            for contract in self._contracts.values():
                status_counts[contract.status] = status_counts.get(contract.status, 0) + 1

            stats = LedgerStats(
                total_contracts=len(self._contracts),
                by_status=status_counts,
                scheduled_payments=len(self._schedules),
                recorded_violations=len(self._violations),
                violation_count=self._violation_count,
            )

        logger.debug(
            "Computed ledger stats",
            extra={"total_contracts": stats.total_contracts},
        )
        return stats

    def _fail(self, contract_id: int, reason: FailureReason) -> Failure:
        logger.warning(
            f"Ledger operation failed for contract {contract_id}: {reason.value}",
            extra={"contract_id": contract_id, "reason": reason.name},
        )
        return Failure(reason)
