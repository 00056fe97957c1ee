from __future__ import annotations

import typer

from .commands import cards_cmd, movements_cmd, profile_cmd, settings_cmd
from .logging_ import setup_logging


def _build_app() -> typer.Typer:
    app = typer.Typer(
        name="tropipay",
        help="Tropipay API CLI",
        no_args_is_help=True,
    )

    app.add_typer(settings_cmd.app, name="settings")
    app.add_typer(cards_cmd.app, name="cards")
    app.add_typer(movements_cmd.app, name="movements")
    app.command("whoami")(profile_cmd.whoami)

    @app.callback()
    def _main(
            verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logs."),
    ):
        setup_logging(verbose)

    return app


app = _build_app()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
