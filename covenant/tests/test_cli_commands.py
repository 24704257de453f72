"""Unit tests for CLI command handling.

Tests verify that the CLI handler correctly:
- Coerces arguments and delegates to the ledger port
- Renders success and failure results as JSON-ready dicts
- Reports bad input as an error result instead of raising
"""

from typing import Any

import pytest

from covenant.adapters.cli.commands import CLICommandHandler
from covenant.core.ledger import ContractLedger
from covenant.core.models import (
    ComplianceViolation,
    Failure,
    FailureReason,
    LedgerStats,
    PaymentReceipt,
    Success,
)
from covenant.tests.fakes import FakeLedgerPort


# ============================================================================
# Test Fixtures
# ============================================================================


@pytest.fixture
def fake_ledger() -> FakeLedgerPort:
    return FakeLedgerPort()


@pytest.fixture
def handler(fake_ledger: FakeLedgerPort) -> CLICommandHandler:
    return CLICommandHandler(fake_ledger)


@pytest.fixture
def live_handler() -> CLICommandHandler:
    """Handler wired to a real ledger."""
    return CLICommandHandler(ContractLedger())


# ============================================================================
# Delegation against the fake port
# ============================================================================


class TestDelegation:
    """The handler passes coerced arguments straight to the port."""

    def test_create_contract(
        self, handler: CLICommandHandler, fake_ledger: FakeLedgerPort
    ) -> None:
        result = handler.create_contract("1", "Active")

        assert fake_ledger.calls == [("create_contract", (1, "Active"))]
        assert result == {
            "status": "success",
            "operation": "create",
            "contract_id": 1,
            "message": "Contract Created Successfully",
        }

    def test_set_payment_coerces_ints(
        self, handler: CLICommandHandler, fake_ledger: FakeLedgerPort
    ) -> None:
        handler.set_payment(1, "1000", 1672531200.0)

        assert fake_ledger.calls == [("set_payment", (1, 1000, 1672531200))]

    def test_pay_renders_penalty(
        self, handler: CLICommandHandler, fake_ledger: FakeLedgerPort
    ) -> None:
        fake_ledger.pay_result = Success(
            PaymentReceipt("Payment received with penalty", 100)
        )

        result = handler.pay(1, 1000, 1672531201)

        assert result["status"] == "success"
        assert result["message"] == "Payment received with penalty"
        assert result["penalty"] == 100

    def test_pay_renders_null_penalty(
        self, handler: CLICommandHandler, fake_ledger: FakeLedgerPort
    ) -> None:
        fake_ledger.pay_result = Success(PaymentReceipt("Payment Successful"))

        result = handler.pay(1, 1000, 1)

        assert "penalty" in result
        assert result["penalty"] is None

    def test_pay_failure(
        self, handler: CLICommandHandler, fake_ledger: FakeLedgerPort
    ) -> None:
        fake_ledger.pay_result = Failure(FailureReason.NO_PAYMENT_SCHEDULED)

        result = handler.pay(1, 1000, 1)

        assert result == {
            "status": "error",
            "operation": "pay",
            "contract_id": 1,
            "message": "No Payment Scheduled",
        }

    def test_check_compliance_verbose_includes_count(
        self, handler: CLICommandHandler, fake_ledger: FakeLedgerPort
    ) -> None:
        fake_ledger.compliance_result = Success("Non-compliance logged")
        fake_ledger.violations_logged = 4

        result = handler.check_compliance(2, "Inactive", verbose=True)

        assert result["message"] == "Non-compliance logged"
        assert result["violation_count"] == 4

    def test_check_compliance_unknown_contract(self, handler: CLICommandHandler) -> None:
        result = handler.check_compliance(5, "Active")

        assert result["status"] == "error"
        assert result["message"] == "Contract Not Found"
        assert "violation_count" not in result

    def test_stats_from_port(
        self, handler: CLICommandHandler, fake_ledger: FakeLedgerPort
    ) -> None:
        fake_ledger.stats = LedgerStats(
            total_contracts=2,
            by_status={"Active": 2},
            scheduled_payments=1,
            recorded_violations=0,
            violation_count=0,
        )

        result = handler.get_stats()

        assert result["data"] == {
            "total_contracts": 2,
            "by_status": {"Active": 2},
            "scheduled_payments": 1,
            "recorded_violations": 0,
            "violation_count": 0,
        }


# ============================================================================
# Argument validation
# ============================================================================


@pytest.mark.parametrize(
    "call",
    [
        lambda h: h.create_contract("abc", "Active"),
        lambda h: h.set_payment(1, "ten", 5),
        lambda h: h.set_payment(1, 10, 1.5),
        lambda h: h.pay(True, 10, 5),
        lambda h: h.pay(1, None, 5),
        lambda h: h.check_compliance([1], "Active"),
        lambda h: h.show_contract("x"),
    ],
)
def test_invalid_arguments_return_error(
    handler: CLICommandHandler, fake_ledger: FakeLedgerPort, call: Any
) -> None:
    """Non-integer arguments are rejected before reaching the port."""
    result = call(handler)

    assert result["status"] == "error"
    assert "must be an integer" in result["message"]
    assert fake_ledger.calls == []


# ============================================================================
# End to end against a real ledger
# ============================================================================


class TestLiveLedger:
    """Run the payment and compliance flows through the CLI handler."""

    def test_payment_flow(self, live_handler: CLICommandHandler) -> None:
        live_handler.create_contract(1, "Active")
        live_handler.set_payment(1, 1000, 1672531200)

        on_time = live_handler.pay(1, 1000, 1672531199)
        assert on_time["message"] == "Payment Successful"
        assert on_time["penalty"] is None

        missing = live_handler.pay(1, 1000, 1672531199)
        assert missing["message"] == "No Payment Scheduled"

        live_handler.set_payment(1, 1000, 1672531200)
        late = live_handler.pay(1, 1000, 1672531201)
        assert late["message"] == "Payment received with penalty"
        assert late["penalty"] == 100

    def test_show_contract_json(self, live_handler: CLICommandHandler) -> None:
        live_handler.create_contract(2, "Active")
        live_handler.set_payment(2, 500, 10)
        live_handler.check_compliance(2, "Inactive")

        result = live_handler.show_contract(2)

        assert result == {
            "status": "success",
            "operation": "show",
            "data": {
                "contract_id": 2,
                "status": "Active",
                "payment_schedule": {"amount": 500, "due_date": 10},
                "violation": "Non-compliance detected",
            },
        }

    def test_show_unknown_contract(self, live_handler: CLICommandHandler) -> None:
        """A contract that was never created is reported as not found."""
        result = live_handler.show_contract(9)

        assert result["status"] == "error"
        assert result["message"] == "Contract Not Found"
        assert result["data"]["status"] is None
        assert result["data"]["payment_schedule"] is None

    def test_show_unknown_contract_keeps_orphan_schedule(
        self, live_handler: CLICommandHandler
    ) -> None:
        """A schedule set without a contract is still visible."""
        live_handler.set_payment(9, 300, 50)

        result = live_handler.show_contract(9, output_format="text")

        assert result["status"] == "error"
        assert result["message"] == "Contract Not Found"
        assert result["data"]["payment_schedule"] == {"amount": 300, "due_date": 50}

    def test_show_contract_text(self, live_handler: CLICommandHandler) -> None:
        live_handler.create_contract(3, "Closed")

        result = live_handler.show_contract(3, output_format="text")

        assert "Contract: 3" in result["data"]
        assert "Status: Closed" in result["data"]
        assert "Payment due: none" in result["data"]
        assert "Violation: none" in result["data"]

    def test_show_contract_unsupported_format(self, live_handler: CLICommandHandler) -> None:
        live_handler.create_contract(3, "Closed")
        result = live_handler.show_contract(3, output_format="xml")

        assert result["status"] == "error"
        assert "Unsupported format" in result["message"]

    def test_stats_unsupported_format(self, live_handler: CLICommandHandler) -> None:
        result = live_handler.get_stats(output_format="xml")

        assert result == {
            "status": "error",
            "operation": "stats",
            "message": "Unsupported format: xml",
        }

    def test_stats_text(self, live_handler: CLICommandHandler) -> None:
        live_handler.create_contract(1, "Active")
        live_handler.check_compliance(1, "Closed")

        result = live_handler.get_stats(output_format="text")

        assert "Contracts: 1" in result["data"]
        assert "  Active: 1" in result["data"]
        assert "Non-compliant checks: 1" in result["data"]


def test_fake_violations_are_served(fake_ledger: FakeLedgerPort) -> None:
    """show_contract reads violations through the port."""
    fake_ledger.create_contract(4, "Active")
    fake_ledger.violations[4] = ComplianceViolation(4)

    result = CLICommandHandler(fake_ledger).show_contract(4)

    assert result["status"] == "success"
    assert result["data"]["violation"] == "Non-compliance detected"
