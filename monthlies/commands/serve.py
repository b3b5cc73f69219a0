"""Run the HTTP API."""

import logging
import sqlite3
import sys

import uvicorn
from rich.console import Console

from monthlies.api import create_app
from monthlies.commands.common import settings_or_exit
from monthlies.store.repository import ExpenseRepository

console = Console()
logger = logging.getLogger(__name__)


def serve_command(host: str | None = None, port: int | None = None) -> None:
    """Serve the expense API until interrupted."""
    settings = settings_or_exit()
    host = host or settings.host
    port = port or settings.port

    try:
        repository = ExpenseRepository.open(settings.database)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    app = create_app(repository, settings.cors_origins, settings.capital_ratio)
    logger.info("Serving %s on http://%s:%d", settings.database, host, port)

    try:
        uvicorn.run(app, host=host, port=port, log_level=settings.log_level.lower())
    finally:
        repository.close()
