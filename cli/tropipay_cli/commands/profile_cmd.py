from __future__ import annotations

import typer
from tropipay_client import TropipayClientError

from .common import open_client, report_error
from .. import console


def whoami(
        environment: str | None = typer.Option(None, "--env", help="production, sandbox or custom."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    """Show the profile of the account behind the configured credentials."""
    client = open_client(environment, base_url)
    try:
        user = client.get_user_profile()
    except TropipayClientError as e:
        report_error("Failed to fetch profile", e)
    finally:
        client.close()

    console.ok(f"Authenticated against {client.base_url}")
    console.field("id", user.id)
    console.field("name", user.display_name)
    console.field("email", user.email)
