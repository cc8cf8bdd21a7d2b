"""Logging for graphql-sock with Rich console output and CLI helpers."""

import json
import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler


class SockLogger(logging.Logger):
    """
    Logger that combines Python logging with CLI formatting methods.

    Provides the standard logging levels (debug, info, warning, error, critical)
    and a few CLI output methods (success, hint, rule, etc.).
    """

    def __init__(self, name: str, level: int = logging.INFO) -> None:
        super().__init__(name, level)
        self.console = Console()

        handler = RichHandler(
            console=self.console,
            rich_tracebacks=True,
            show_time=True,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        self.addHandler(handler)

    def print(self, message: str) -> None:
        """Print a plain message (with Rich markup support)."""
        self.console.print(message)

    def colored(self, message: str, style: str = "bold cyan") -> None:
        self.print(f"[{style}]{message}[/{style}]")

    def success(self, message: str) -> None:
        """
        Print a success message in green with checkmark icon.

        Args:
            message: Message to display
        """
        self.print(f"[green]✓[/green] {message}")

    def hint(self, message: str) -> None:
        self.colored(message, "dim")

    def rule(self, title: str, style: str = "bold blue") -> None:
        """
        Print a horizontal rule with a title.

        Args:
            title: Title text for the rule
            style: Rich style string (default: "bold blue")
        """
        self.console.rule(f"[{style}]{title}")

    def print_dict(self, data: dict[str, Any]) -> None:
        """Print dictionary data as syntax highlighted JSON."""
        self.console.print_json(json.dumps(data, indent=2))


def get_logger(name: str = "graphql_sock") -> SockLogger:
    """
    Get or create a graphql-sock logger instance.

    Args:
        name: Logger name (default: "graphql_sock")

    Returns:
        SockLogger instance
    """
    logging.setLoggerClass(SockLogger)
    try:
        logger = logging.getLogger(name)
    finally:
        logging.setLoggerClass(logging.Logger)

    return logger  # type: ignore[return-value]
