"""Composition root for the Covenant contract ledger.

This module is the ONLY location that imports both core domain logic
and concrete adapter implementations. All wiring of dependencies
happens here, creating a clear entry point for the application.

Module Structure:
- Configuration loading via config module
- Core service initialization
- Adapter instantiation
- Interactive CLI loop
"""

import json
import logging
import sys
from typing import Any

from covenant.adapters.cli.commands import CLICommandHandler
from covenant.config import Settings, load_settings
from covenant.core.ledger import ContractLedger
from covenant.core.penalty import PenaltyCalculator


def _run_cli_interactive(cli_handler: CLICommandHandler, settings: Settings) -> None:
    """Run interactive CLI loop.

    Provides a REPL-like interface for ledger commands.

    Args:
        cli_handler: CLICommandHandler instance for executing commands.
        settings: Loaded settings (output format, verbosity).
    """
    logger = logging.getLogger(__name__)
    logger.info("Starting interactive CLI. Type 'help' for available commands or 'exit' to quit.")

    while True:
        try:
            command_line = input("covenant> ").strip()

            if not command_line:
                continue

            if command_line.lower() == "exit":
                logger.info("Exiting CLI")
                break

            if command_line.lower() == "help":
                _print_cli_help()
                continue

            # Parse command and arguments
            parts = command_line.split(maxsplit=1)
            command = parts[0].lower()
            args_str = parts[1] if len(parts) > 1 else ""

            try:
                args = json.loads(args_str) if args_str else {}
            except json.JSONDecodeError:
                logger.error("Invalid JSON arguments. Use 'help' for command syntax.")
                continue

            if not isinstance(args, dict):
                logger.error("Arguments must be a JSON object. Use 'help' for command syntax.")
                continue

            try:
                result = _execute_cli_command(cli_handler, command, args, settings)
                print(json.dumps(result, indent=2, default=str))
            except Exception as e:
                logger.error(f"Command execution error: {e}", exc_info=True)
                print(json.dumps({
                    "status": "error",
                    "message": str(e)
                }, indent=2))

        except EOFError:
            # Ctrl+D to exit
            logger.info("EOF received, exiting CLI")
            break
        except KeyboardInterrupt:
            logger.info("Interrupted by user")
            continue


def _require(args: dict[str, Any], *names: str) -> None:
    for name in names:
        if name not in args:
            raise ValueError(f"Missing required parameter: {name}")


def _flag(args: dict[str, Any], name: str, default: bool) -> bool:
    value = args.get(name, default)
    if not isinstance(value, bool):
        raise ValueError(f"{name} must be true or false, got {value!r}")
    return value


def _execute_cli_command(
    cli_handler: CLICommandHandler,
    command: str,
    args: dict[str, Any],
    settings: Settings,
) -> dict[str, Any]:
    """Execute a CLI command.

    Args:
        cli_handler: CLICommandHandler instance.
        command: Command name.
        args: Command arguments.
        settings: Loaded settings supplying defaults for format and verbosity.

    Returns:
        Command result dictionary.

    Raises:
        ValueError: If command is not recognized, a required argument is missing,
            or verbose is not a JSON boolean.
    """
    verbose = _flag(args, "verbose", settings.debug)
    output_format = args.get("format", settings.output_format)

    if command == "create":
        _require(args, "contract_id", "status")
        return cli_handler.create_contract(
            contract_id=args["contract_id"],
            status=args["status"],
            verbose=verbose,
        )

    elif command == "schedule":
        _require(args, "contract_id", "amount", "due_date")
        return cli_handler.set_payment(
            contract_id=args["contract_id"],
            amount=args["amount"],
            due_date=args["due_date"],
            verbose=verbose,
        )

    elif command == "pay":
        _require(args, "contract_id", "amount", "current_time")
        return cli_handler.pay(
            contract_id=args["contract_id"],
            amount=args["amount"],
            current_time=args["current_time"],
            verbose=verbose,
        )

    elif command == "check":
        _require(args, "contract_id", "criteria")
        return cli_handler.check_compliance(
            contract_id=args["contract_id"],
            criteria=args["criteria"],
            verbose=verbose,
        )

    elif command == "show":
        _require(args, "contract_id")
        return cli_handler.show_contract(
            contract_id=args["contract_id"],
            output_format=output_format,
        )

    elif command == "stats":
        return cli_handler.get_stats(output_format=output_format)

    else:
        raise ValueError(f"Unknown command: {command}. Use 'help' for available commands.")


def _print_cli_help() -> None:
    """Print CLI help message."""
    help_text = """
Available Commands (JSON format):

  create
    Create or overwrite a contract.
    Required: contract_id, status

    Example: create {"contract_id": 1, "status": "Active"}

  schedule
    Set the payment schedule for a contract, replacing any previous one.
    Required: contract_id, amount, due_date

    Example: schedule {"contract_id": 1, "amount": 1000, "due_date": 1672531200}

  pay
    Settle the scheduled payment. Paying on or after the due date adds a penalty.
    Required: contract_id, amount, current_time

    Example: pay {"contract_id": 1, "amount": 1000, "current_time": 1672531199}

  check
    Compare a contract's status with an expected value.
    Required: contract_id, criteria

    Example: check {"contract_id": 1, "criteria": "Active"}

  show
    Show the contract, pending payment and recorded violation.
    Required: contract_id
    Optional: format (json, text)

    Example: show {"contract_id": 1, "format": "text"}

  stats
    Summarize the ledger.

  help
    Show this help message.

  exit
    Exit the CLI.

Note: All commands accept arguments as a single JSON object.
Provide the JSON after the command name on the same line.
    """
    print(help_text)


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level, logging.INFO)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )


def build_cli(settings: Settings) -> CLICommandHandler:
    """Wire a fresh ledger and the CLI handler that drives it.

    Args:
        settings: Loaded application settings.

    Returns:
        CLICommandHandler bound to a new, empty ContractLedger.
    """
    penalty_calculator = PenaltyCalculator(rate_percent=settings.penalty_rate_percent)
    ledger = ContractLedger(penalty_calculator=penalty_calculator)
    return CLICommandHandler(ledger)


def bootstrap() -> None:
    """Load configuration, wire the ledger, and start the CLI.

    Steps:
    1. Load configuration from environment
    2. Configure logging
    3. Initialize the ledger and CLI adapter
    4. Run the interactive loop
    """
    settings = load_settings()

    configure_logging(settings.log_level, settings.log_format)
    logger = logging.getLogger(__name__)
    logger.info("Loading Covenant contract ledger...")

    cli_handler = build_cli(settings)
    logger.info(
        f"Ledger initialized with {settings.penalty_rate_percent}% late penalty"
    )

    _run_cli_interactive(cli_handler, settings)


def main() -> None:
    """Application entry point.

    Exit codes:
        0: Successful shutdown
        1: Fatal bootstrap or runtime error
        130: Interrupted by user (SIGINT/KeyboardInterrupt)
    """
    logger = logging.getLogger(__name__)
    try:
        bootstrap()
    except KeyboardInterrupt:
        logger.warning("Shutdown requested by user (SIGINT)")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)
    sys.exit(0)


if __name__ == "__main__":
    main()
