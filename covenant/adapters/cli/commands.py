"""CLI command implementations for Covenant ledger operations.

Provides human-initiated actions through command-line interface.

This adapter maps CLI commands (create, schedule, pay, check, show, stats)
to LedgerPort operations and turns their results into JSON-ready
dictionaries.
"""

import logging
from typing import Any

from covenant.core.models import FailureReason, PaymentReceipt, Result
from covenant.core.ports import LedgerPort

logger = logging.getLogger(__name__)


def _as_int(name: str, value: Any) -> int:
    """Coerce a CLI argument to int, rejecting bools and fractions."""
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{name} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be an integer, got {value!r}") from e


class CLICommandHandler:
    """Handles CLI commands by delegating to LedgerPort.

    Every method returns a JSON-serializable dictionary with a
    "status" of "success" or "error"; nothing is raised for bad input.
    """

    def __init__(self, ledger: LedgerPort):
        """Initialize the CLI command handler.

        Args:
            ledger: LedgerPort implementation to execute commands.
        """
        self.ledger = ledger

    def create_contract(
        self, contract_id: Any, status: Any, verbose: bool = False
    ) -> dict[str, Any]:
        """Create a contract via CLI.

        Args:
            contract_id: Contract identifier (coerced to int).
            status: Contract status text.
            verbose: If True, log additional information.

        Returns:
            Dictionary with status and message.
        """
        try:
            cid = _as_int("contract_id", contract_id)
        except ValueError as e:
            return self._error("create", contract_id, e)

        result = self.ledger.create_contract(cid, str(status))

        if verbose:
            logger.info(
                f"Created contract {cid}",
                extra={"status": status, "verbose": True},
            )

        return self._render("create", cid, result)

    def set_payment(
        self,
        contract_id: Any,
        amount: Any,
        due_date: Any,
        verbose: bool = False,
    ) -> dict[str, Any]:
        """Schedule a payment via CLI.

        Args:
            contract_id: Contract identifier (coerced to int).
            amount: Amount due in minor units (coerced to int).
            due_date: Due timestamp (coerced to int).
            verbose: If True, log additional information.

        Returns:
            Dictionary with status and message.
        """
        try:
            cid = _as_int("contract_id", contract_id)
            amount_due = _as_int("amount", amount)
            due = _as_int("due_date", due_date)
        except ValueError as e:
            return self._error("schedule", contract_id, e)

        result = self.ledger.set_payment(cid, amount_due, due)

        if verbose:
            logger.info(
                f"Scheduled payment for contract {cid}",
                extra={"amount": amount_due, "due_date": due, "verbose": True},
            )

        return self._render("schedule", cid, result)

    def pay(
        self,
        contract_id: Any,
        amount: Any,
        current_time: Any,
        verbose: bool = False,
    ) -> dict[str, Any]:
        """Settle a scheduled payment via CLI.

        Args:
            contract_id: Contract identifier (coerced to int).
            amount: Amount paid in minor units (coerced to int).
            current_time: Payment timestamp (coerced to int).
            verbose: If True, log additional information.

        Returns:
            Dictionary with status, message and penalty on success.
        """
        try:
            cid = _as_int("contract_id", contract_id)
            paid = _as_int("amount", amount)
            now = _as_int("current_time", current_time)
        except ValueError as e:
            return self._error("pay", contract_id, e)

        result = self.ledger.pay(cid, paid, now)

        if verbose and result.ok:
            logger.info(
                f"Settled payment for contract {cid}",
                extra={"amount": paid, "current_time": now, "verbose": True},
            )

        return self._render("pay", cid, result)

    def check_compliance(
        self, contract_id: Any, criteria: Any, verbose: bool = False
    ) -> dict[str, Any]:
        """Check a contract's compliance via CLI.

        Args:
            contract_id: Contract identifier (coerced to int).
            criteria: Expected contract status.
            verbose: If True, include the current violation count.

        Returns:
            Dictionary with status and message.
        """
        try:
            cid = _as_int("contract_id", contract_id)
        except ValueError as e:
            return self._error("check", contract_id, e)

        response = self._render(
            "check", cid, self.ledger.check_compliance(cid, str(criteria))
        )

        if verbose:
            response["violation_count"] = self.ledger.violation_count

        return response

    def show_contract(
        self, contract_id: Any, output_format: str = "json"
    ) -> dict[str, Any]:
        """Show everything the ledger holds for one contract.

        Args:
            contract_id: Contract identifier (coerced to int).
            output_format: Output format ('json', 'text'). Default 'json'.

        Returns:
            Dictionary with contract details or status/message on error.
        """
        try:
            cid = _as_int("contract_id", contract_id)
        except ValueError as e:
            return self._error("show", contract_id, e)

        contract = self.ledger.get_contract(cid)
        schedule = self.ledger.get_payment_schedule(cid)
        violation = self.ledger.get_violation(cid)

        data: dict[str, Any] = {
            "contract_id": cid,
            "status": contract.status if contract else None,
            "payment_schedule": (
                {"amount": schedule.amount, "due_date": schedule.due_date}
                if schedule
                else None
            ),
            "violation": violation.violation if violation else None,
        }

        # A schedule may exist without its contract, so data is still returned
        if contract is None:
            logger.error(f"Failed to show contract {cid}: {FailureReason.CONTRACT_NOT_FOUND.value}")
            return {
                "status": "error",
                "operation": "show",
                "contract_id": cid,
                "message": FailureReason.CONTRACT_NOT_FOUND.value,
                "data": data,
            }

        if output_format == "json":
            return {"status": "success", "operation": "show", "data": data}

        elif output_format == "text":
            lines = [
                f"Contract: {cid}",
                f"Status: {contract.status}",
            ]
            if schedule:
                lines.append(
                    f"Payment due: {schedule.amount} at {schedule.due_date}"
                )
            else:
                lines.append("Payment due: none")
            lines.append(f"Violation: {data['violation'] or 'none'}")
            return {
                "status": "success",
                "operation": "show",
                "data": "\n".join(lines),
            }

        else:
            return {
                "status": "error",
                "operation": "show",
                "message": f"Unsupported format: {output_format}",
            }

    def get_stats(self, output_format: str = "json") -> dict[str, Any]:
        """Summarize the ledger via CLI.

        Args:
            output_format: Output format ('json', 'text'). Default 'json'.

        Returns:
            Dictionary with ledger statistics.
        """
        stats = self.ledger.get_stats()
        data = {
            "total_contracts": stats.total_contracts,
            "by_status": dict(stats.by_status),
            "scheduled_payments": stats.scheduled_payments,
            "recorded_violations": stats.recorded_violations,
            "violation_count": stats.violation_count,
        }

        if output_format == "json":
            return {"status": "success", "operation": "stats", "data": data}

        elif output_format == "text":
            lines = [
                f"Contracts: {stats.total_contracts}",
                *(f"  {status}: {count}" for status, count in sorted(data["by_status"].items())),
                f"Scheduled payments: {stats.scheduled_payments}",
                f"Recorded violations: {stats.recorded_violations}",
                f"Non-compliant checks: {stats.violation_count}",
            ]
            return {"status": "success", "operation": "stats", "data": "\n".join(lines)}

        else:
            return {
                "status": "error",
                "operation": "stats",
                "message": f"Unsupported format: {output_format}",
            }

    def _render(
        self, operation: str, contract_id: int, result: Result[Any]
    ) -> dict[str, Any]:
        response: dict[str, Any] = {
            "status": "success" if result.ok else "error",
            "operation": operation,
            "contract_id": contract_id,
            "message": result.message,
        }
        if result.ok and isinstance(result.unwrap(), PaymentReceipt):
            response["penalty"] = result.unwrap().penalty
        elif not result.ok:
            logger.error(f"Failed to {operation} contract {contract_id}: {result.message}")
        return response

    def _error(
        self, operation: str, contract_id: Any, error: Exception
    ) -> dict[str, Any]:
        logger.error(f"Invalid arguments for {operation}: {error}")
        return {
            "status": "error",
            "operation": operation,
            "contract_id": contract_id,
            "message": str(error),
        }
