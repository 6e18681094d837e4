# # Themed rich console shared by logging and the form-state debug view.

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass

from rich.console import Console
from rich.theme import Theme as RichTheme

from .sync import ControlState

WIDTH_ENV = "FIELDKIT_CONSOLE_WIDTH"

BASE_STYLES = {
    "info": "cyan",
    "ok": "green",
    "warn": "yellow",
    "err": "red",
    "k": "bold",
    "dirty": "magenta",
    "fallback": "yellow italic",
}

# # One style per control state, named "state.<value>" in the theme
STATE_STYLES = {
    ControlState.UNINITIALIZED: "dim",
    ControlState.SEEDED: "green",
    ControlState.EDITED: "bold magenta",
    ControlState.UNMOUNTED: "dim strike",
}


def state_style(state: ControlState) -> str:
    return f"state.{state.value}"


@dataclass(frozen=True)
class ConsoleOptions:
    # If None, use FIELDKIT_CONSOLE_WIDTH or the terminal size.
    width: int | None = None
    no_color: bool = False


def _env_width() -> int | None:
    raw = os.getenv(WIDTH_ENV)
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def make_console(opts: ConsoleOptions | None = None) -> Console:
    opts = opts or ConsoleOptions()

    width = opts.width if opts.width is not None else _env_width()
    if width is None:
        width = shutil.get_terminal_size(fallback=(120, 40)).columns

    theme = RichTheme({**BASE_STYLES, **{state_style(s): style for s, style in STATE_STYLES.items()}})

    return Console(
        width=width,
        theme=theme,
        color_system=None if opts.no_color else "auto",
        # Tables truncate with an ellipsis instead of wrapping.
        soft_wrap=False,
        highlight=False,
    )
