from __future__ import annotations

import logging
from pathlib import Path

from rich.logging import RichHandler

from .config import Config
from .console import make_console, ConsoleOptions

FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(
    *,
    level: str = "INFO",
    log_file: str | None = None,
    console_width: int | None = None,
    no_color: bool = False,
) -> None:
    """
    Route the ``fieldkit`` loggers (and everything else on the root logger)
    through a RichHandler. Pass ``log_file`` to also keep a plain-text copy.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    console = make_console(ConsoleOptions(width=console_width, no_color=no_color))
    handlers: list[logging.Handler] = [
        RichHandler(
            console=console,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
            markup=False,
            show_time=True,
            show_level=True,
            show_path=False,
        )
    ]

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(numeric_level)
        fh.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(fh)

    logging.basicConfig(level=numeric_level, handlers=handlers, force=True)


def setup_logging_from_config(cfg: Config, *, level: str = "INFO", log_file: str | None = None) -> None:
    setup_logging(level=level, log_file=log_file, console_width=cfg.console_width, no_color=cfg.no_color)
