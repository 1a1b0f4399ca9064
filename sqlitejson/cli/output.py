"""Output helpers for the CLI.

Exported JSON is the only thing written to stdout; every status or error
message goes to the stderr console.
"""

from rich.console import Console
from rich.markup import escape

console = Console()
console_err = Console(stderr=True)


def print_document(document: str) -> None:
    """Write an exported JSON string to stdout exactly as produced.

    Args:
        document: Serialized export
    """
    console.out(document, highlight=False)


def print_names(names: list[str]) -> None:
    """Write one name per line to stdout.

    Args:
        names: Table or view names
    """
    for name in names:
        console.out(name, highlight=False)


def print_success(message: str) -> None:
    """Print success message with checkmark.

    Args:
        message: Success message to display
    """
    console_err.print(f"[green]✓[/green] {escape(message)}")


def print_error(message: str) -> None:
    """Print error message with X mark.

    Args:
        message: Error message to display
    """
    console_err.print(f"[red]✗[/red] {escape(message)}")


def print_info(message: str) -> None:
    """Print info message with info symbol.

    Args:
        message: Info message to display
    """
    console_err.print(f"[blue]ℹ[/blue] {escape(message)}")
