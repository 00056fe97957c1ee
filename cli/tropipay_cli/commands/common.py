from __future__ import annotations

from typing import NoReturn

import typer
from tropipay_client import ApiError, AuthError, NetworkError, TropipayClient, TropipayClientError
from tropipay_client.errors_utils import error_message

from .. import console
from ..config import ConfigError, load_config
from ..http import make_client


def fail(msg: str) -> NoReturn:
    console.err(msg)
    raise typer.Exit(code=2)


def open_client(environment: str | None, base_url: str | None) -> TropipayClient:
    """Client for the effective settings, with the command's --env/--base-url applied."""
    cfg = load_config()
    try:
        return make_client(cfg, environment_override=environment, base_url_override=base_url)
    except ConfigError as e:
        fail(str(e))


def report_error(action: str, exc: TropipayClientError) -> NoReturn:
    if isinstance(exc, AuthError):
        fail(f"{action}: authentication failed (status {exc.status_code}). Check client_id/client_secret.")
    if isinstance(exc, ApiError):
        detail = error_message(exc.body) or "-"
        fail(f"{action}: API responded {exc.status_code}: {detail}")
    if isinstance(exc, NetworkError):
        fail(f"{action}: network error: {exc}")
    fail(f"{action}: {exc}")
