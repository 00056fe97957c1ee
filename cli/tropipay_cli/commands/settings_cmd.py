from __future__ import annotations

import os

import typer

from .common import fail
from .. import console
from ..config import (
    CUSTOM_ENVIRONMENT,
    ConfigError,
    config_path,
    load_config,
    load_file_config,
    normalize_base_url,
    normalize_environment,
    resolve_base_url,
    save_config,
)

app = typer.Typer(help="Manage local CLI settings (~/.config/tropipay/config.toml).")


@app.command("init")
def init_settings(
        force: bool = typer.Option(False, "--force", help="Overwrite existing config."),
        client_id: str = typer.Option(..., "--client-id", prompt="Client ID", help="API client ID."),
        client_secret: str = typer.Option(
            ...,
            "--client-secret",
            prompt="Client secret",
            hide_input=True,
            help="API client secret.",
        ),
        environment: str = typer.Option("sandbox", "--env", help="production, sandbox or custom."),
        base_url: str | None = typer.Option(None, "--base-url", help="Base URL for the custom environment."),
):
    path = config_path()
    if os.path.exists(path) and not force:
        console.info(f"Config already exists: {path}")
        console.info("Use --force to overwrite.")
        return

    cfg = load_file_config()
    try:
        cfg.environment = normalize_environment(environment)
    except ConfigError as e:
        fail(str(e))
    cfg.base_url = normalize_base_url(base_url, warn=True)
    if cfg.environment == CUSTOM_ENVIRONMENT and not cfg.base_url:
        fail("--base-url is required for the custom environment.")
    cfg.auth.client_id = client_id.strip()
    cfg.auth.client_secret = client_secret.strip()
    if not cfg.auth.client_id or not cfg.auth.client_secret:
        fail("Client ID and secret cannot be empty.")
    saved = save_config(cfg)
    console.ok(f"Config written: {saved}")


@app.command("show")
def show_settings():
    """Effective settings after TROPIPAY_* and .env overrides."""
    cfg = load_config()
    try:
        base_url = resolve_base_url(cfg)
    except ConfigError:
        base_url = "(missing)"
    console.info(f"Config file: {config_path()}")
    console.field("environment", cfg.environment)
    console.field("base_url", base_url)
    console.field("timeout_s", cfg.timeout_s)
    console.field("client_id", cfg.auth.client_id or "(empty)")
    console.field("client_secret", console.masked(cfg.auth.client_secret))


@app.command("set")
def set_setting(
        environment: str | None = typer.Option(None, "--env", help="production, sandbox or custom."),
        base_url: str | None = typer.Option(None, "--base-url", help="Base URL for the custom environment."),
        timeout_s: float | None = typer.Option(None, "--timeout", min=1.0, help="Request timeout in seconds."),
        client_id: str | None = typer.Option(None, "--client-id", help="API client ID."),
):
    """Update the config file. TROPIPAY_* variables are not written back."""
    cfg = load_file_config()
    try:
        if environment is not None:
            cfg.environment = normalize_environment(environment)
        if base_url is not None:
            cfg.base_url = normalize_base_url(base_url, warn=True)
        resolve_base_url(cfg)
    except ConfigError as e:
        fail(str(e))
    if timeout_s is not None:
        cfg.timeout_s = timeout_s
    if client_id is not None:
        cfg.auth.client_id = client_id.strip()
    saved = save_config(cfg)
    console.ok(f"Settings updated: {saved}")
