"""Shared helpers for the protog command line.

Provides Rich-based console output, ``.proto`` filename derivation and the
guarded file write used when a rendered document is saved to disk.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()

PROTO_SUFFIX = ".proto"


class OutputExistsError(FileExistsError):
    """Raised when the target ``.proto`` file exists and overwrite is off."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(
            f"file already exists: {path}, pass -f if you want to overwrite it"
        )


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------


def proto_filename(name: str) -> str:
    """Derive the output filename from a package name.

    Examples::

        proto_filename("Greet.v1")    -> "greet.v1.proto"
        proto_filename("Hello.proto") -> "hello.proto"
    """
    lowered = name.strip().lower()
    if lowered.endswith(PROTO_SUFFIX):
        return lowered
    return lowered + PROTO_SUFFIX


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


async def write_proto(
    content: bytes,
    output_dir: str | Path,
    name: str,
    force: bool = False,
) -> Path:
    """Write a rendered document to ``<output_dir>/<name>.proto``.

    The write is performed in a worker thread so callers running an event
    loop are not blocked.

    Args:
        content: Rendered document bytes.
        output_dir: Target directory.  Created if missing.
        name: Package name the filename is derived from.
        force: Overwrite an existing file instead of refusing.

    Returns:
        The path that was written.

    Raises:
        OutputExistsError: If the file exists and *force* is ``False``.
    """
    path = Path(output_dir) / proto_filename(name)
    if not force and path.exists():
        raise OutputExistsError(path)
    await asyncio.to_thread(_write_file, path, content)
    return path


def _write_file(path: Path, content: bytes) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_document(content: bytes) -> None:
    """Print a rendered document verbatim.

    Written straight to the console's file: Rich would expand the indentation
    tabs and interpret ``[...]`` as markup.
    """
    console.file.write(content.decode("utf-8") + "\n")
    console.file.flush()


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
