"""CLI for the ``cashflow_ledger`` package.

A Typer-based console interface over :class:`~cashflow_ledger.store.LedgerStore`.
Environment variables (``CASHFLOW_DATA_FILE``, ``CASHFLOW_LOG_LEVEL``) are
loaded from a local ``.env`` using ``python-dotenv`` before the store is
opened. Every mutating command saves the ledger explicitly before returning.
"""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

import typer
from dotenv import load_dotenv
from typer.models import OptionInfo

from .codec import LoadResult
from .config import load_settings
from .logging_setup import configure_logging
from .models import format_record
from .store import LedgerStore

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Record, query and persist cash-flow transactions in a binary ledger file.",
)


def _store(ctx: typer.Context) -> LedgerStore:
    store = ctx.obj
    if not isinstance(store, LedgerStore):  # pragma: no cover - callback always runs
        raise RuntimeError("ledger store not initialized")
    return store


def _save_or_exit(store: LedgerStore) -> None:
    if not store.save():
        print(f"Error: could not write ledger file: {store.path}", file=sys.stderr)
        raise typer.Exit(1)


# Module-level option objects to satisfy ruff B008 (no calls in parameter
# defaults).
DATA_FILE_OPTION: OptionInfo = typer.Option(
    None,
    "--data-file",
    help="Ledger file to operate on (falls back to CASHFLOW_DATA_FILE).",
    dir_okay=False,
)
DATE_FORMATS = ["%Y-%m-%d"]

# Commands that replace the whole ledger may run over a corrupt file.
RECOVERY_COMMANDS = frozenset({"clear", "import-json"})


@app.callback()
def _root(
    ctx: typer.Context,
    data_file: Path | None = DATA_FILE_OPTION,
) -> None:
    """Load ``.env``, configure logging and open the ledger."""

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    settings = load_settings(data_file=data_file)
    configure_logging(settings.log_level)

    store = LedgerStore(settings.data_file)
    result = store.last_load_result
    recoverable = (
        result is LoadResult.MALFORMED and ctx.invoked_subcommand in RECOVERY_COMMANDS
    )
    if result in (LoadResult.IO_ERROR, LoadResult.MALFORMED) and not recoverable:
        print(
            f"Error: could not load ledger file {settings.data_file} ({result.value})",
            file=sys.stderr,
        )
        raise typer.Exit(1)
    ctx.obj = store


@app.command("add", context_settings={"ignore_unknown_options": True})
def add_cmd(
    ctx: typer.Context,
    timestamp: str,
    seller: str,
    buyer: str,
    merchandise: str,
    cost: float,
    currency: str,
    category: str,
) -> None:
    """Add a transaction and print its id.

    COST may be negative (refunds, expenses) without a ``--`` separator.
    """

    store = _store(ctx)
    record = store.add_data(timestamp, seller, buyer, merchandise, cost, currency, category)
    _save_or_exit(store)
    typer.echo(str(record.id))


@app.command("list")
def list_cmd(ctx: typer.Context) -> None:
    """Print every transaction, one per line."""

    for record in _store(ctx).list_data_entries():
        typer.echo(format_record(record))


@app.command("show")
def show_cmd(ctx: typer.Context, record_id: int) -> None:
    """Print a single transaction by id."""

    record = _store(ctx).search_data_entries(record_id)
    if record is None:
        print("Transaction ID not found.", file=sys.stderr)
        raise typer.Exit(1)
    typer.echo(format_record(record))


@app.command("delete")
def delete_cmd(ctx: typer.Context, record_id: int) -> None:
    """Delete a transaction by id."""

    store = _store(ctx)
    # delete_data is silent on a miss, so check first to report it.
    if store.search_data_entries(record_id) is None:
        print("Transaction ID not found.", file=sys.stderr)
        raise typer.Exit(1)
    store.delete_data(record_id)
    _save_or_exit(store)
    typer.echo("Transaction deleted successfully.")


@app.command("clear")
def clear_cmd(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", help="Confirm removal of every transaction."),
) -> None:
    """Remove every transaction and reset ids to 1."""

    if not yes:
        print("Refusing to clear without --yes.", file=sys.stderr)
        raise typer.Exit(1)
    store = _store(ctx)
    store.clear()
    _save_or_exit(store)
    typer.echo("Ledger cleared.")


@app.command("categories")
def categories_cmd(ctx: typer.Context) -> None:
    """Print each category with the ids filed under it."""

    store = _store(ctx)
    for label in store.categories():
        ids = ", ".join(str(i) for i in store.ids_for_category(label))
        typer.echo(f"{label}\t{ids}")


@app.command("report")
def report_cmd(
    ctx: typer.Context,
    start: datetime = typer.Option(..., "--start", formats=DATE_FORMATS, help="YYYY-MM-DD"),
    end: datetime = typer.Option(..., "--end", formats=DATE_FORMATS, help="YYYY-MM-DD"),
    category: str | None = typer.Option(None, "--category", help="Optional category filter."),
) -> None:
    """Print transactions within a date range, then totals per category."""

    from .report import filter_records, totals_by_category

    try:
        rows = filter_records(
            _store(ctx).list_data_entries(),
            start=start.date(),
            end=end.date(),
            category=category,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise typer.Exit(1) from e

    for record in rows:
        typer.echo(format_record(record))
    for label, per_currency in totals_by_category(rows).items():
        for currency, total in per_currency.items():
            typer.echo(f"Total {label}: {total:.2f} {currency}")


@app.command("export-json")
def export_json_cmd(ctx: typer.Context, path: Path) -> None:
    """Write the ledger to a JSON snapshot."""

    from .snapshot import export_snapshot

    try:
        n = export_snapshot(_store(ctx), path)
    except OSError as e:
        print(f"Error: could not write {path}: {e}", file=sys.stderr)
        raise typer.Exit(1) from e
    typer.echo(f"Exported {n} transactions to {path}")


@app.command("import-json")
def import_json_cmd(ctx: typer.Context, path: Path) -> None:
    """Replace the ledger with the rows of a JSON snapshot."""

    from .errors import SnapshotError
    from .snapshot import import_snapshot

    store = _store(ctx)
    try:
        n = import_snapshot(store, path)
    except FileNotFoundError as e:
        print(f"Error: File not found: {path}", file=sys.stderr)
        raise typer.Exit(1) from e
    except (OSError, SnapshotError) as e:
        print(f"Error: could not import {path}: {e}", file=sys.stderr)
        raise typer.Exit(1) from e
    _save_or_exit(store)
    typer.echo(f"Imported {n} transactions from {path}")


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
