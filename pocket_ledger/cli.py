"""
Console entry point for Pocket Ledger.

    pocket-ledger --data-file ~/.pocket-ledger/users.json

Loads the user set, runs the command loop, and saves on exit.
"""

from pathlib import Path
from typing import Optional

import typer

from pocket_ledger.audit import AuditLogger, configure_logging
from pocket_ledger.auth import AuthService
from pocket_ledger.commands import CommandProcessor, run_console
from pocket_ledger.config import Settings, get_settings
from pocket_ledger.services import FinanceService, NotificationService
from pocket_ledger.storage import JsonFileUserStorage, StorageError, UserStorageInterface


app = typer.Typer(add_completion=False, help="Personal finance ledger console.")


def create_app_components(
    settings: Settings,
    storage: UserStorageInterface,
) -> tuple[AuthService, CommandProcessor]:
    """
    Factory function to wire the services together.

    Returns:
        (auth_service, command_processor)
    """
    auth_settings = settings.auth
    ledger_settings = settings.ledger

    auth = AuthService(
        storage,
        hash_iterations=auth_settings.hash_iterations,
        min_password_length=auth_settings.min_password_length,
    )
    finance = FinanceService(
        enforce_budget_limits=ledger_settings.enforce_budget_limits,
        timestamp_format=ledger_settings.timestamp_format,
    )
    processor = CommandProcessor(
        auth=auth,
        finance=finance,
        notifications=NotificationService(),
        audit=AuditLogger(),
    )
    return auth, processor


@app.command()
def main(
    data_file: Optional[Path] = typer.Option(
        None,
        "--data-file",
        "-f",
        help="JSON file holding users and wallets (default: STORAGE_DATA_FILE or users.json)",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Log level for stderr (default: LOG_LEVEL or WARNING)",
    ),
) -> None:
    """Run the interactive ledger console."""
    settings = get_settings()
    app_settings = settings.app
    try:
        configure_logging(log_level or app_settings.log_level, app_settings.json_logs)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--log-level")

    storage = JsonFileUserStorage(data_file or settings.storage.data_file)
    auth, processor = create_app_components(settings, storage)

    try:
        auth.load()
    except StorageError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    run_console(processor, read_line=input, write=typer.echo)


if __name__ == "__main__":
    app()
