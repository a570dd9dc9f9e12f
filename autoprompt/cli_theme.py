"""Terminal theme for the AUTOPROMPT CLI.

Sakura & slate palette:
  - Compact wordmark banner
  - Numbered section headers ("01 · SECTION NAME")
  - Rounded tables with slate borders
  - Status badges with reverse styling
  - Works in both light and dark terminal modes
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Generator

from rich import box
from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeElapsedColumn
from rich.style import Style
from rich.table import Table
from rich.text import Text

# ── Brand ─────────────────────────────────────────────────────────

BRAND = "A U T O P R O M P T"
TAGLINE = "Prompt extraction, optimisation and batching"

# ── Palette ───────────────────────────────────────────────────────

SAKURA = "#E8799A"
SLATE = "#8A9BB0"
MUTED = "dim"


# ── Banner ────────────────────────────────────────────────────────


def print_banner(version: str, console: Console) -> None:
    """Print the wordmark, tagline, and version."""
    console.print()
    console.print(f"  [bold {SAKURA}]{BRAND}[/bold {SAKURA}]")
    console.print(f"  [{SLATE}]{TAGLINE}[/{SLATE}]")
    console.print(f"  [{MUTED}]v{version}[/{MUTED}]")
    console.print()


def print_version(version: str, console: Console) -> None:
    """Print a compact branded version line."""
    t = Text()
    t.append(BRAND, style=f"bold {SAKURA}")
    t.append(f"  v{version}", style=MUTED)
    console.print(t)


# ── Section headers ──────────────────────────────────────────────


def section(
    title: str,
    console: Console,
    number: str | None = None,
    uppercase: bool = True,
) -> None:
    """Print a numbered section header."""
    console.print()
    t = Text()
    if number:
        t.append(f"  {number}", style=f"bold {SAKURA}")
        t.append(" · ", style=MUTED)
    else:
        t.append("  ", style="")
    t.append(title.upper() if uppercase else title, style="bold")
    console.print(t)
    console.print(f"  {'─' * len(TAGLINE)}", style=SLATE)


# ── Tables ───────────────────────────────────────────────────────


def make_table(title: str | None = None, **kwargs: object) -> Table:
    """Create a table with rounded slate borders."""
    return Table(
        title=title,
        box=box.ROUNDED,
        border_style=SLATE,
        title_style=f"bold {SAKURA}",
        header_style="bold",
        padding=(0, 1),
        **kwargs,
    )


def make_kv_table() -> Table:
    """Create a headerless two-column key–value table."""
    t = make_table(show_header=False)
    t.add_column("Key", style=f"bold {SAKURA}", no_wrap=True)
    t.add_column("Value")
    return t


# ── Inline badges ───────────────────────────────────────────────


def badge(label: str, variant: str = "default") -> str:
    """Return Rich markup for a filled status badge."""
    colors = {
        "default": SAKURA,
        "pending": SLATE,
        "running": "cyan",
        "completed": "green",
        "failed": "red",
        "cancelled": "yellow",
        "warn": "yellow",
        "error": "red",
    }
    c = colors.get(variant, SAKURA)
    return f"[reverse {c}] {label} [/reverse {c}]"


# ── Status lines ─────────────────────────────────────────────────


def info(msg: str) -> str:
    """Info-level status line."""
    return f"  [{SAKURA}]›[/{SAKURA}] [{MUTED}]{msg}[/{MUTED}]"


def ok(msg: str) -> str:
    """Success status line (green check)."""
    return f"  [bold green]✓[/bold green] {msg}"


def warn(msg: str) -> str:
    """Warning status line (yellow bang)."""
    return f"  [bold yellow]![/bold yellow] [yellow]{msg}[/yellow]"


def err(msg: str) -> str:
    """Error status line (red cross)."""
    return f"  [bold red]✗[/bold red] {msg}"


# ── Progress ─────────────────────────────────────────────────────


@contextmanager
def progress(total: int, label: str, console: Console) -> Generator[object, None, None]:
    """Progress bar for countable operations (batch files)."""
    p = Progress(
        TextColumn(f"  [{SAKURA}]▸[/{SAKURA}]"),
        BarColumn(complete_style=Style(color=SAKURA), finished_style=Style(color=SAKURA)),
        MofNCompleteColumn(),
        TextColumn(f"[{MUTED}]{label}[/{MUTED}]"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )
    with p:
        task = p.add_task(label, total=total)
        yield lambda: p.advance(task)
