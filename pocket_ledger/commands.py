"""
Command Dispatcher for Pocket Ledger

Turns console lines into ledger operations and ledger results into text.

DESIGN DECISION: The dispatcher owns all input parsing and the session.
- Amounts are parsed into Decimal here; the ledger only ever sees
  well-typed values
- Who is logged in lives in an explicit Session passed to every call,
  never in ambient state
- Business errors come back as "Error: ..." lines, never as crashes
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional

import structlog

from pocket_ledger.audit import AuditLogger
from pocket_ledger.auth import AuthError, AuthService
from pocket_ledger.models.audit import AuditEventBuilder
from pocket_ledger.models.transaction import TransactionType
from pocket_ledger.models.user import User
from pocket_ledger.models.wallet import (
    BudgetExceededError,
    InsufficientFundsError,
    LedgerError,
)
from pocket_ledger.services import FinanceService, NotificationService
from pocket_ledger.storage.interface import StorageError


PROMPT_BANNER = "=" * 50
PROMPT_TEXT = "Enter a command ('help' lists commands):"

HELP_TEXT = "\n".join([
    "=" * 69,
    "Available commands:",
    "register <username> <password> - Register a new user",
    "login <username> <password> - Log in",
    "add-income <amount> <category> - Record income",
    "add-expense <amount> <category> - Record an expense",
    "set-budget <category> <amount> - Set the budget for a category",
    "show-balance - Show the current balance",
    "show-summary - Show total income and expenses",
    "show-budget [<category>] - Show budgets (all, or one category)",
    "show-income-budget - Show budgets for income categories",
    "show-expense-budget - Show budgets for expense categories",
    "show-transactions [<category>] - Show transactions (all, or one category)",
    "show-overview - Show the full overview",
    "logout - Log out",
    "help - Show available commands",
    "exit - Save and quit",
    "=" * 69,
])


class CommandError(Exception):
    """Malformed command line: unknown command, bad arguments, bad amount."""
    pass


@dataclass
class Session:
    """Per-console session state."""
    user: Optional[User] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


@dataclass(frozen=True)
class CommandResult:
    """What to print, and whether the loop should stop."""
    output: str
    exit: bool = False


def parse_amount(text: str) -> Decimal:
    """Parse a user-supplied amount into an exact Decimal."""
    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise CommandError(f"Invalid amount: {text}") from None
    if not amount.is_finite():
        raise CommandError(f"Invalid amount: {text}")
    return amount


class CommandProcessor:
    """
    Dispatches one console line at a time.

    Commands that touch a wallet require a logged-in session.
    """

    def __init__(
        self,
        auth: AuthService,
        finance: FinanceService,
        notifications: Optional[NotificationService] = None,
        audit: Optional[AuditLogger] = None,
    ):
        self._auth = auth
        self._finance = finance
        self._notifications = notifications or NotificationService()
        self._audit = audit or AuditLogger()
        self._logger = structlog.get_logger(__name__)

        self._public: dict[str, Callable[[Session, list[str]], CommandResult]] = {
            "register": self._register,
            "login": self._login,
            "logout": self._logout,
            "help": self._help,
            "exit": self._exit,
        }
        self._private: dict[str, Callable[[Session, list[str]], CommandResult]] = {
            "add-income": self._add_income,
            "add-expense": self._add_expense,
            "set-budget": self._set_budget,
            "show-balance": self._show_balance,
            "show-summary": self._show_summary,
            "show-budget": self._show_budget,
            "show-income-budget": self._show_income_budget,
            "show-expense-budget": self._show_expense_budget,
            "show-transactions": self._show_transactions,
            "show-overview": self._show_overview,
        }

    def execute(self, session: Session, line: str) -> CommandResult:
        """Run one command line against the session."""
        parts = line.split()
        if not parts:
            return CommandResult("")

        command, args = parts[0], parts[1:]
        username = session.user.username if session.user else None
        self._logger.debug("command_received", command=command, username=username)

        try:
            if command in self._public:
                return self._public[command](session, args)
            if command in self._private:
                if not session.is_authenticated:
                    return CommandResult("Please log in first.")
                return self._private[command](session, args)
            return CommandResult("Unknown command. Type 'help' for the list of commands.")
        except StorageError as e:
            self._audit.log(AuditEventBuilder.command_failed(command, str(e), username))
            return CommandResult(f"Error: {e}")
        except (CommandError, LedgerError, AuthError) as e:
            return CommandResult(f"Error: {e}")

    # -------------------------------------------------------------------------
    # Argument helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _expect(args: list[str], count: int, usage: str) -> None:
        if len(args) != count:
            raise CommandError(f"Usage: {usage}")

    @staticmethod
    def _amount_then_category(args: list[str], usage: str) -> tuple[Decimal, str]:
        # the category may contain spaces: everything after the amount
        if len(args) < 2:
            raise CommandError(f"Usage: {usage}")
        return parse_amount(args[0]), " ".join(args[1:])

    # -------------------------------------------------------------------------
    # Account commands
    # -------------------------------------------------------------------------

    def _register(self, session: Session, args: list[str]) -> CommandResult:
        self._expect(args, 2, "register <username> <password>")
        username, password = args
        self._auth.register(username, password)
        self._audit.log(AuditEventBuilder.user_registered(username))
        return CommandResult("User registered successfully.")

    def _login(self, session: Session, args: list[str]) -> CommandResult:
        self._expect(args, 2, "login <username> <password>")
        username, password = args
        try:
            session.user = self._auth.login(username, password)
        except AuthError:
            self._audit.log(AuditEventBuilder.login_failed(username))
            raise
        self._audit.log(AuditEventBuilder.login_succeeded(username))
        return CommandResult("Logged in successfully.")

    def _logout(self, session: Session, args: list[str]) -> CommandResult:
        if session.user is not None:
            self._audit.log(AuditEventBuilder.logged_out(session.user.username))
        session.user = None
        return CommandResult("Logged out.")

    def _help(self, session: Session, args: list[str]) -> CommandResult:
        return CommandResult(HELP_TEXT)

    def _exit(self, session: Session, args: list[str]) -> CommandResult:
        count = self._auth.save()
        self._audit.log(AuditEventBuilder.users_saved(count))
        return CommandResult("Goodbye!", exit=True)

    # -------------------------------------------------------------------------
    # Ledger commands
    # -------------------------------------------------------------------------

    def _add_income(self, session: Session, args: list[str]) -> CommandResult:
        amount, category = self._amount_then_category(args, "add-income <amount> <category>")
        self._finance.add_income(session.user, amount, category)
        self._audit.log(
            AuditEventBuilder.income_recorded(session.user.username, str(amount), category)
        )
        return CommandResult("Income added.")

    def _add_expense(self, session: Session, args: list[str]) -> CommandResult:
        amount, category = self._amount_then_category(args, "add-expense <amount> <category>")
        user = session.user
        remaining = user.wallet.get_budget_remain(category)
        # only categories with an explicit budget get a user-facing notice
        over_budget = (
            user.wallet.has_budget(category)
            and user.wallet.exceeds_budget(amount, category)
        )

        try:
            self._finance.add_expense(user, amount, category)
        except (InsufficientFundsError, BudgetExceededError) as e:
            self._audit.log(
                AuditEventBuilder.expense_rejected(user.username, str(amount), category, str(e))
            )
            raise

        self._audit.log(
            AuditEventBuilder.expense_recorded(user.username, str(amount), category)
        )
        if over_budget:
            self._audit.log(
                AuditEventBuilder.budget_exceeded(
                    user.username, category, str(amount), str(remaining)
                )
            )
            self._notifications.notify(f"Budget limit exceeded for category: {category}")
        return CommandResult("Expense added.")

    def _set_budget(self, session: Session, args: list[str]) -> CommandResult:
        # set-budget <category...> <amount>
        if len(args) < 2:
            raise CommandError("Usage: set-budget <category> <amount>")
        category, amount = " ".join(args[:-1]), parse_amount(args[-1])
        self._finance.set_budget(session.user, category, amount)
        self._audit.log(
            AuditEventBuilder.budget_set(session.user.username, category, str(amount))
        )
        return CommandResult("Budget set.")

    def _show_balance(self, session: Session, args: list[str]) -> CommandResult:
        self._expect(args, 0, "show-balance")
        return CommandResult(self._finance.get_balance(session.user))

    def _show_summary(self, session: Session, args: list[str]) -> CommandResult:
        self._expect(args, 0, "show-summary")
        return CommandResult(self._finance.get_summary(session.user))

    def _show_budget(self, session: Session, args: list[str]) -> CommandResult:
        if args:
            return CommandResult(
                self._finance.get_category_budget(session.user, " ".join(args))
            )
        return CommandResult(self._finance.get_budget(session.user))

    def _show_income_budget(self, session: Session, args: list[str]) -> CommandResult:
        self._expect(args, 0, "show-income-budget")
        return CommandResult(self._finance.get_budget(session.user, TransactionType.INCOME))

    def _show_expense_budget(self, session: Session, args: list[str]) -> CommandResult:
        self._expect(args, 0, "show-expense-budget")
        return CommandResult(self._finance.get_budget(session.user, TransactionType.EXPENSE))

    def _show_transactions(self, session: Session, args: list[str]) -> CommandResult:
        if args:
            return CommandResult(
                self._finance.get_category_transactions(session.user, " ".join(args))
            )
        return CommandResult(self._finance.get_transactions(session.user))

    def _show_overview(self, session: Session, args: list[str]) -> CommandResult:
        self._expect(args, 0, "show-overview")
        return CommandResult(self._finance.get_overview(session.user))


def run_console(
    processor: CommandProcessor,
    read_line: Callable[[str], str],
    write: Callable[[str], None],
    session: Optional[Session] = None,
) -> Session:
    """
    Read-eval-print loop.

    Stops on `exit`. End of input is treated as `exit`, so users are
    still saved.
    """
    session = session or Session()
    while True:
        write(PROMPT_BANNER)
        write(PROMPT_TEXT)
        try:
            line = read_line(">> ")
            at_eof = False
        except EOFError:
            line, at_eof = "exit", True

        result = processor.execute(session, line)
        if result.output:
            write(result.output)
        if result.exit:
            return session
        if at_eof:
            # save failed and nothing more can be read
            return session
