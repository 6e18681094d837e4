from __future__ import annotations

import json
from typing import Any, TYPE_CHECKING

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .console import ConsoleOptions, make_console, state_style

if TYPE_CHECKING:
    from .session import EditingSession


def _safe_str(v: Any) -> str:
    if v is None:
        return ""
    if isinstance(v, (dict, list)):
        return json.dumps(v, ensure_ascii=False, default=str)
    return str(v)


def form_state_table(session: "EditingSession") -> Table:
    t = Table(
        title=f"Form state: {session.form.name}",
        box=box.SIMPLE_HEAVY,
        show_lines=False,
        expand=False,
        padding=(0, 1),
    )

    # Truncation is handled via overflow="ellipsis" so rows never wrap.
    col_specs = {
        "Path":   dict(justify="left", max_width=28),
        "Widget": dict(justify="left", max_width=12),
        "State":  dict(justify="left", max_width=10),
        "Dirty":  dict(justify="center", max_width=5),
        "Value":  dict(justify="left", max_width=36),
        "Errors": dict(justify="left", max_width=48),
    }
    for name, spec in col_specs.items():
        t.add_column(name, no_wrap=True, overflow="ellipsis", **spec)

    pending = set(session.dispatcher.pending())
    for path in session.arena.paths():
        inst = session.control(path)
        slot = session.slot(path)
        widget = Text(slot.widget.name) if not slot.fallback else Text(f"{slot.descriptor.widget}?", style="fallback")
        state = Text(inst.state.value, style=state_style(inst.state))
        dirty = Text("*", style="dirty") if inst.dirty else Text("")
        if path in pending:
            dirty.append("~", style="info")
        errors = Text("; ".join(e.message for e in slot.errors), style="err") if slot.errors else Text("ok", style="ok")
        if slot.async_pending:
            errors = Text("pending", style="warn")
        t.add_row(path, widget, state, dirty, _safe_str(inst.buffered_value), errors)
    return t


def render_form_state(
    session: "EditingSession",
    *,
    width: int | None = None,
    no_color: bool = False,
    console: Console | None = None,
) -> None:
    console = console or make_console(ConsoleOptions(width=width, no_color=no_color))

    console.print(form_state_table(session))

    ok = session.can_submit()
    n_errors = sum(len(v) for v in session.all_errors().values())
    console.print(
        Panel.fit(
            f"[k]Can submit[/k]: {'yes' if ok else 'no'}  "
            f"[info]Fields[/info]: {len(session.arena):,}  "
            f"[info]Errors[/info]: {n_errors:,}  "
            f"[info]Pending commits[/info]: {len(session.dispatcher.pending()):,}",
            border_style="ok" if ok else "err",
        )
    )
