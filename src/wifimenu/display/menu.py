"""Rich numbered menus and password prompt for wifimenu.

Builds a column-wrapped, 1-based listing of SSIDs and reads the operator's
choice.  Can be used standalone to preview the layout::

    python -m wifimenu.display.menu HomeNet Office "Coffee Shop"
"""

from __future__ import annotations

import sys
from typing import Callable, Sequence

from rich.columns import Columns
from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

# Spacing between menu columns
SEPARATION = 8


def build_menu(options: Sequence[str]) -> Columns:
    """Build the numbered listing, wrapped into as many columns as fit."""
    items = [f"[grey50]{i}.[/grey50] {escape(opt)}" for i, opt in enumerate(options, 1)]
    return Columns(items, padding=(0, SEPARATION), equal=True, column_first=False)


def parse_selection(raw: str, count: int) -> int | None:
    """Return the 1-based index typed by the operator, or None if invalid."""
    raw = raw.strip()
    if not raw.isdigit():
        return None
    selection = int(raw)
    if 1 <= selection <= count:
        return selection
    return None


def choose(
    options: Sequence[str],
    prompt: str,
    *,
    console: Console | None = None,
    read_line: Callable[[], str] | None = None,
) -> int | None:
    """Show *options* as a numbered menu and read one choice.

    Returns the 1-based index of the chosen option, or None when there is
    nothing to choose from or the input is not an in-range number.  An empty
    *options* list returns None without reading input.

    Args:
        options: Menu entries in display order.
        prompt: Line printed above the listing.
        console: Rich console to print on (default: stdout).
        read_line: Callable returning one line of input (testing seam).
    """
    if not options:
        return None
    console = console or Console()
    read_line = read_line or (lambda: console.input(""))

    console.print(escape(prompt))
    console.print(build_menu(options))
    return parse_selection(read_line(), len(options))


def ask_password(prompt: str = "Type the password", *, console: Console | None = None) -> str:
    """Prompt for a password without echoing it; the input is returned as typed."""
    return Prompt.ask(prompt, password=True, console=console)


def main(argv: list[str] | None = None) -> None:
    """Render a menu of the given entries and print the choice."""
    options = sys.argv[1:] if argv is None else argv
    if not options:
        print("usage: python -m wifimenu.display.menu OPTION [OPTION ...]", file=sys.stderr)
        sys.exit(2)
    selection = choose(options, "Choose your desired option: ")
    print(options[selection - 1] if selection else "(none)")


if __name__ == "__main__":
    main()
