# # Config loader: JSON -> dataclass

from __future__ import annotations

import dataclasses
import json
import logging
from pathlib import Path
from typing import Optional

log = logging.getLogger(__name__)


@dataclasses.dataclass
class Config:
    # # Editing
    debounce_seconds: float = 0.5
    disabled: bool = False

    # # Widgets
    fallback_widget: str = "placeholder"

    # # Console
    console_width: Optional[int] = None
    no_color: bool = False


def load_config(path: Path) -> Config:
    cfg = Config()
    if not path.exists():
        return cfg

    data = json.loads(path.read_text(encoding="utf-8"))
    for k, v in data.items():
        if hasattr(cfg, k):
            setattr(cfg, k, v)
        else:
            log.warning("Ignoring unknown config key: %s", k)
    return cfg
