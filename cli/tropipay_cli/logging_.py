from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LIBRARY_LOGGER = "tropipay_client"
# httpx logs every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore")


def setup_logging(verbose: bool) -> None:
    """-v shows token refreshes and dispatched requests from the client library."""
    level = logging.DEBUG if verbose else logging.WARNING
    handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=verbose)
    logging.basicConfig(level=level, format="%(name)s: %(message)s", handlers=[handler])

    logging.getLogger(LIBRARY_LOGGER).setLevel(level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.INFO if verbose else logging.WARNING)
