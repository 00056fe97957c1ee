from __future__ import annotations

from typing import Any

import typer
from rich.table import Table
from tropipay_client import TropipayClientError
from tropipay_client.models import Movement, MovementFilter, MovementList

from .common import open_client, report_error
from .. import console
from ..formatting import format_amount, format_list_timestamp

app = typer.Typer(help="Account movements (transactions).")


def _build_filter(
        state: list[str] | None,
        currency: str | None,
        reference: str | None,
        date_from: str | None,
        date_to: str | None,
        account_id: str | None = None,
) -> MovementFilter | None:
    f = MovementFilter(
        state=[s.strip().lower() for s in state or [] if s.strip()],
        currency=(currency or "").strip().upper(),
        reference=(reference or "").strip(),
        created_at_from=(date_from or "").strip(),
        created_at_to=(date_to or "").strip(),
        account_id=(account_id or "").strip(),
    )
    return f if f.to_dict() else None


def _party(user) -> str:
    if user is None:
        return "-"
    return user.display_name or user.email or "-"


def _movement_json(m: Movement) -> dict[str, Any]:
    return {
        "id": m.id.value if m.id is not None else None,
        "amount": m.amount,
        "currency": m.currency,
        "state": m.state,
        "reference": m.reference,
        "createdAt": m.created_at,
        "completedAt": m.completed_at,
        "balanceBefore": m.balance_before,
        "balanceAfter": m.balance_after,
        "sender": _party(m.sender) if m.sender else None,
        "recipient": _party(m.recipient) if m.recipient else None,
    }


def _print_movements(result: MovementList, *, json_out: bool, limit: int, offset: int) -> None:
    if json_out:
        console.print_json(
            {
                "items": [_movement_json(m) for m in result.items],
                "totalCount": result.total_count,
                "hasMore": result.has_more,
            }
        )
        return

    console.info(f"total={result.total_count} limit={limit} offset={offset}")
    table = Table(title="Movements")
    table.add_column("id", style="bold")
    table.add_column("created_at")
    table.add_column("state")
    table.add_column("amount", justify="right")
    table.add_column("reference")
    table.add_column("sender")
    table.add_column("recipient")
    for m in result.items:
        table.add_row(
            str(m.id) if m.id is not None else "-",
            format_list_timestamp(m.created_at),
            m.state or "-",
            format_amount(m.amount, m.currency),
            m.reference or "-",
            _party(m.sender),
            _party(m.recipient),
        )
    console.console.print(table)
    if result.has_more:
        console.info(f"More results available: --offset {offset + len(result.items)}")


@app.command("list")
def list_movements(
        account: str | None = typer.Option(None, "--account", help="Only movements of this account ID."),
        limit: int = typer.Option(20, "--limit", help="Max movements to return."),
        offset: int = typer.Option(0, "--offset", help="Offset for listing."),
        state: list[str] | None = typer.Option(None, "--state", help="Filter by state (repeatable)."),
        currency: str | None = typer.Option(None, "--currency", help="Filter by currency, e.g. EUR."),
        reference: str | None = typer.Option(None, "--reference", help="Filter by reference."),
        date_from: str | None = typer.Option(None, "--from", help="Created at or after (ISO date)."),
        date_to: str | None = typer.Option(None, "--to", help="Created at or before (ISO date)."),
        environment: str | None = typer.Option(None, "--env", help="production, sandbox or custom."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    movement_filter = _build_filter(state, currency, reference, date_from, date_to)
    client = open_client(environment, base_url)
    try:
        if account:
            result = client.list_account_movements(
                account, limit=limit, offset=offset, movement_filter=movement_filter
            )
        else:
            result = client.list_movements(limit=limit, offset=offset, movement_filter=movement_filter)
    except TropipayClientError as e:
        report_error("Failed to list movements", e)
    finally:
        client.close()

    _print_movements(result, json_out=json_out, limit=limit, offset=offset)


@app.command("search")
def search_movements(
        account: str | None = typer.Option(None, "--account", help="Only movements of this account ID."),
        limit: int = typer.Option(20, "--limit", help="Max movements to return."),
        offset: int = typer.Option(0, "--offset", help="Offset for listing."),
        state: list[str] | None = typer.Option(None, "--state", help="Filter by state (repeatable)."),
        currency: str | None = typer.Option(None, "--currency", help="Filter by currency, e.g. EUR."),
        reference: str | None = typer.Option(None, "--reference", help="Filter by reference."),
        date_from: str | None = typer.Option(None, "--from", help="Created at or after (ISO date)."),
        date_to: str | None = typer.Option(None, "--to", help="Created at or before (ISO date)."),
        environment: str | None = typer.Option(None, "--env", help="production, sandbox or custom."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    """Advanced search through the business GraphQL endpoint."""
    movement_filter = _build_filter(state, currency, reference, date_from, date_to, account_id=account)
    client = open_client(environment, base_url)
    try:
        result = client.search_movements(movement_filter=movement_filter, limit=limit, offset=offset)
    except TropipayClientError as e:
        report_error("Failed to search movements", e)
    finally:
        client.close()

    _print_movements(result, json_out=json_out, limit=limit, offset=offset)
