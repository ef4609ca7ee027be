"""
Interactive Wallet Terminal

This is the menu-driven console session a user interacts with.

DESIGN PRINCIPLES:
1. Simple numbered menu, one action per choice
2. Every failure is reported and the menu comes back
3. No hidden actions: each deposit or withdrawal is confirmed on screen

Malformed amounts are NOT rejected here. They become 0 (with a warning),
and the flow then refuses 0 as a non-positive amount.
"""

import logging
import re
import sys
from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

from wallet_tracker.audit import attach_log_file, create_correlation_id, detach_log_file
from wallet_tracker.config import WalletSettings, get_settings
from wallet_tracker.ledger import InsufficientFundsError, WalletError
from wallet_tracker.orchestrator import (
    BalanceReplayError,
    TransactionRejectedError,
    WalletFlow,
    create_app_components,
)


# Signed 64-bit range, matching the widest amount the ledger accepts as input
AMOUNT_MIN = -(2 ** 63)
AMOUNT_MAX = 2 ** 63 - 1

_AMOUNT_PATTERN = re.compile(r"[+-]?[0-9]+")

MENU_OPTIONS = (
    ("1", "Check Balance"),
    ("2", "Deposit"),
    ("3", "Withdraw"),
    ("4", "View Transaction History"),
    ("5", "Exit"),
)


def parse_amount(raw: str) -> Optional[int]:
    """
    Parse a typed amount.

    Accepts an optional sign followed by ASCII digits, within the signed
    64-bit range. Surrounding whitespace is ignored.

    Returns None when the text is not such a number.
    """
    text = raw.strip()
    if not _AMOUNT_PATTERN.fullmatch(text):
        return None

    amount = int(text)
    if not AMOUNT_MIN <= amount <= AMOUNT_MAX:
        return None
    return amount


class WalletTerminal:
    """
    Terminal interface for wallet operations.

    Input and output go through the callables passed in, so a session
    can be scripted.
    """

    def __init__(
        self,
        flow: Optional[WalletFlow] = None,
        settings: Optional[WalletSettings] = None,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ):
        self._settings = settings or get_settings()
        self._input = input_fn
        self._output = output_fn
        self._log_handler: Optional[logging.Handler] = None

        if self._settings.log_to_file:
            self._init_logging()

        if flow is None:
            flow, _ = create_app_components()
        self._flow = flow
        self._audit_logger = flow.audit_logger
        self._session_id = create_correlation_id()

    @property
    def flow(self) -> WalletFlow:
        return self._flow

    @property
    def log_handler(self) -> Optional[logging.Handler]:
        return self._log_handler

    def _init_logging(self) -> None:
        """Open this session's timestamped log file. Failure is not fatal."""
        log_file = self._settings.log_dir / (
            f"terminal_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
        )
        try:
            self._log_handler = attach_log_file(
                log_file,
                component=self._settings.log_component,
                level=self._settings.effective_log_level,
            )
        except OSError as e:
            print(f"Warning: Failed to initialize logging: {e}", file=sys.stderr)

    def close(self) -> None:
        """Detach the session log file."""
        if self._log_handler is not None:
            detach_log_file(self._log_handler)
            self._log_handler = None

    def run(self) -> None:
        """Start the interactive session and loop until the user exits."""
        app_name = self._settings.app_name
        self._audit_logger.log_session_started(self._session_id)
        self._output(f"Welcome to {app_name}!")

        while True:
            try:
                should_exit = self.show_menu()
            except (EOFError, KeyboardInterrupt):
                should_exit = True
            except OSError as e:
                self._audit_logger.log_error(
                    error_type="menu_error",
                    error_message=str(e),
                    correlation_id=self._session_id,
                )
                self._output(f"Error: {e}")
                continue

            if should_exit:
                self._audit_logger.log_session_ended(
                    self._session_id, transaction_count=len(self._flow.ledger)
                )
                self._output(f"Thank you for using {app_name}!")
                break

    def show_menu(self) -> bool:
        """
        Display the menu and handle one choice.

        Returns:
            True if the user wants to exit
        """
        self._output("\nPlease select an option:")
        for key, label in MENU_OPTIONS:
            self._output(f"{key}. {label}")

        choice = self._input("\nEnter your choice (1-5): ").strip()
        correlation_id = create_correlation_id()

        actions = {
            "1": ("Check Balance", self.check_balance),
            "2": ("Deposit", self.deposit),
            "3": ("Withdraw", self.withdraw),
            "4": ("View History", self.view_history),
        }

        if choice == "5":
            self._audit_logger.log_menu_selected(choice, "Exit", correlation_id)
            return True

        if choice not in actions:
            self._audit_logger.log_invalid_menu_choice(choice, correlation_id)
            self._output("Invalid choice. Please try again.")
            return False

        action, handler = actions[choice]
        self._audit_logger.log_menu_selected(choice, action, correlation_id)
        handler(correlation_id)
        return False

    def get_wallet_address(self, correlation_id: UUID) -> str:
        """Prompt for a wallet address. Any text is accepted."""
        wallet_id = self._input("Enter wallet address: ").strip()
        self._audit_logger.log_wallet_entered(wallet_id, correlation_id)
        return wallet_id

    def get_amount(self, correlation_id: UUID) -> int:
        """Prompt for an amount. Unparseable input counts as 0."""
        raw = self._input("Enter amount: ")
        amount = parse_amount(raw)

        if amount is None:
            self._audit_logger.log_amount_parse_failed(raw.strip(), correlation_id)
            self._output("Invalid amount. Please enter a valid number.")
            return 0

        self._audit_logger.log_amount_entered(amount, correlation_id)
        return amount

    def check_balance(self, correlation_id: UUID) -> None:
        wallet_id = self.get_wallet_address(correlation_id)
        try:
            balance = self._flow.check_balance(wallet_id, correlation_id)
        except WalletError as e:
            self._output(f"Error checking balance: {e}")
            return
        self._output(f"Balance for wallet {wallet_id}: {balance}")

    def deposit(self, correlation_id: UUID) -> None:
        wallet_id = self.get_wallet_address(correlation_id)
        amount = self.get_amount(correlation_id)
        try:
            self._flow.deposit(wallet_id, amount, correlation_id)
        except TransactionRejectedError as e:
            self._output(str(e))
            return
        self._output(f"Successfully deposited {amount} to the wallet")

    def withdraw(self, correlation_id: UUID) -> None:
        wallet_id = self.get_wallet_address(correlation_id)
        amount = self.get_amount(correlation_id)
        try:
            self._flow.withdraw(wallet_id, amount, correlation_id)
        except TransactionRejectedError as e:
            self._output(str(e))
            return
        except InsufficientFundsError as e:
            self._output(f"Insufficient funds. Available balance: {e.available}")
            return
        except BalanceReplayError as e:
            self._output(f"Error: {e}")
            return
        self._output(f"Successfully withdrew {amount} from the wallet")

    def view_history(self, correlation_id: UUID) -> None:
        wallet_id = self.get_wallet_address(correlation_id)
        for line in self._flow.view_history(wallet_id, correlation_id):
            self._output(line)


def main() -> None:
    """Run one interactive wallet session on stdin/stdout."""
    terminal = WalletTerminal()
    try:
        terminal.run()
    finally:
        terminal.close()
