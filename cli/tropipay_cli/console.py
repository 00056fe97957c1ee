from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.markup import escape

console = Console()


def print_json(data: Any) -> None:
    console.print_json(data=data, default=str)


def field(label: str, value: Any) -> None:
    """One indented ``label: value`` line under a heading; empty values show as ``-``."""
    shown = "-" if value is None or value == "" else str(value)
    console.print(f"  [dim]{escape(label)}:[/] {escape(shown)}")


def masked(secret: str) -> str:
    secret = secret.strip()
    if not secret:
        return "(empty)"
    if len(secret) <= 8:
        return "(set)"
    return f"{secret[:4]}…{secret[-2:]}"


def info(msg: str) -> None:
    console.print(f"[cyan]-[/] {escape(msg)}")


def ok(msg: str) -> None:
    console.print(f"[bold green]✓[/] {escape(msg)}")


def warn(msg: str) -> None:
    console.print(f"[bold yellow]warning:[/] {escape(msg)}")


def err(msg: str) -> None:
    console.print(f"[bold red]error:[/] {escape(msg)}")
