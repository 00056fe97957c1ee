from __future__ import annotations

from dataclasses import asdict

import typer
from rich.table import Table
from tropipay_client import TropipayClientError
from tropipay_client.models import CreatePaymentCardRequest, PaymentCard

from .common import open_client, report_error
from .. import console
from ..formatting import format_amount, format_list_timestamp

app = typer.Typer(help="Payment cards (payment links).")


def _print_card(card: PaymentCard) -> None:
    console.ok("Payment card:")
    console.field("id", card.id)
    console.field("concept", card.concept)
    console.field("reference", card.reference)
    console.field("amount", format_amount(card.amount, card.currency))
    console.field("single_use", card.single_use)
    console.field("short_url", card.short_url)
    console.field("payment_url", card.payment_url)
    console.field("created_at", format_list_timestamp(card.created_at))


@app.command("list")
def list_cards(
        environment: str | None = typer.Option(None, "--env", help="production, sandbox or custom."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = open_client(environment, base_url)
    try:
        cards = client.list_payment_cards()
    except TropipayClientError as e:
        report_error("Failed to list payment cards", e)
    finally:
        client.close()

    if json_out:
        console.print_json([asdict(c) for c in cards])
        return

    table = Table(title="Payment cards")
    table.add_column("id", style="bold")
    table.add_column("concept")
    table.add_column("amount", justify="right")
    table.add_column("short_url")
    table.add_column("created_at")
    for c in cards:
        table.add_row(
            c.id or "-",
            c.concept or "-",
            format_amount(c.amount, c.currency),
            c.short_url or "-",
            format_list_timestamp(c.created_at),
        )
    console.console.print(table)


@app.command("show")
def show_card(
        card_id: str = typer.Argument(..., help="Payment card ID."),
        environment: str | None = typer.Option(None, "--env", help="production, sandbox or custom."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = open_client(environment, base_url)
    try:
        card = client.get_payment_card(card_id)
    except TropipayClientError as e:
        report_error("Failed to fetch payment card", e)
    finally:
        client.close()

    if json_out:
        console.print_json(asdict(card))
        return
    _print_card(card)


@app.command("create")
def create_card(
        number: str = typer.Option(..., "--number", prompt=True, help="Card number."),
        cvc: str = typer.Option(..., "--cvc", prompt=True, hide_input=True, help="Card CVC."),
        holder_name: str = typer.Option(..., "--holder", prompt="Holder name", help="Card holder name."),
        expiry_month: int = typer.Option(..., "--month", prompt="Expiry month", min=1, max=12),
        expiry_year: int = typer.Option(..., "--year", prompt="Expiry year"),
        environment: str | None = typer.Option(None, "--env", help="production, sandbox or custom."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    req = CreatePaymentCardRequest(
        number=number.replace(" ", ""),
        cvc=cvc,
        holder_name=holder_name,
        expiry_month=expiry_month,
        expiry_year=expiry_year,
    )
    client = open_client(environment, base_url)
    try:
        card = client.create_payment_card(req)
    except TropipayClientError as e:
        report_error("Failed to create payment card", e)
    finally:
        client.close()

    if json_out:
        console.print_json(asdict(card))
        return
    _print_card(card)


@app.command("delete")
def delete_card(
        card_id: str = typer.Argument(..., help="Payment card ID."),
        yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
        environment: str | None = typer.Option(None, "--env", help="production, sandbox or custom."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    if not yes and not typer.confirm(f"Delete payment card {card_id}?", default=False):
        console.info("Aborted.")
        raise typer.Exit(code=0)

    client = open_client(environment, base_url)
    try:
        client.delete_payment_card(card_id)
    except TropipayClientError as e:
        report_error("Failed to delete payment card", e)
    finally:
        client.close()
    console.ok(f"Payment card {card_id} deleted.")
