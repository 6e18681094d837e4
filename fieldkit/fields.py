# # Field descriptors, i18n modes and value helpers shared by every layer.

from __future__ import annotations

import copy
import dataclasses
import enum
from typing import Any, Dict, List, Mapping, Optional, Union

from .errors import FormConfigError

FieldValue = Union[None, str, int, float, bool, List["FieldValue"], Dict[str, "FieldValue"]]

PATH_SEP = "/"


class I18nMode(str, enum.Enum):
    NONE = "none"
    TRANSLATE = "translate"
    DUPLICATE = "duplicate"

    @classmethod
    def coerce(cls, raw: Any) -> "I18nMode":
        # # Accepts enum members, names, values and the boolean shorthand (true == translate)
        if isinstance(raw, cls):
            return raw
        if raw is None or raw is False:
            return cls.NONE
        if raw is True:
            return cls.TRANSLATE
        s = str(raw).strip().lower()
        for m in cls:
            if s in (m.value, m.name.lower()):
                return m
        raise FormConfigError(f"Invalid i18n mode: {raw!r}")


@dataclasses.dataclass(frozen=True)
class FieldDescriptor:
    name: str
    widget: str
    label: Optional[str] = None
    required: bool = False
    min: Optional[int] = None
    max: Optional[int] = None
    multiple: bool = False
    i18n: I18nMode = I18nMode.NONE
    default: Any = None
    options: Mapping[str, Any] = dataclasses.field(default_factory=dict)

    @property
    def display_label(self) -> str:
        return self.label or self.name


_DESCRIPTOR_KEYS = {"name", "widget", "label", "required", "min", "max", "multiple", "i18n", "default"}


def _opt_int(data: Mapping[str, Any], key: str, field_name: str) -> Optional[int]:
    v = data.get(key)
    if v is None:
        return None
    if isinstance(v, bool) or not isinstance(v, int):
        raise FormConfigError(f"Field {field_name!r}: {key} must be an integer, got {v!r}")
    return v


def descriptor_from_dict(data: Mapping[str, Any], name: Optional[str] = None) -> FieldDescriptor:
    """Build a descriptor from a raw mapping; unrecognised keys become widget options."""
    field_name = str(name if name is not None else data.get("name") or "")
    if not field_name:
        raise FormConfigError("Field is missing a name")
    widget = data.get("widget")
    if not widget:
        raise FormConfigError(f"Field {field_name!r} is missing a widget type")

    lo = _opt_int(data, "min", field_name)
    hi = _opt_int(data, "max", field_name)
    if lo is not None and hi is not None and lo > hi:
        raise FormConfigError(f"Field {field_name!r}: min ({lo}) is greater than max ({hi})")

    options = {k: v for k, v in data.items() if k not in _DESCRIPTOR_KEYS}
    return FieldDescriptor(
        name=field_name,
        widget=str(widget),
        label=data.get("label"),
        required=bool(data.get("required", False)),
        min=lo,
        max=hi,
        multiple=bool(data.get("multiple", False)),
        i18n=I18nMode.coerce(data.get("i18n")),
        default=data.get("default"),
        options=options,
    )


def field_path(name: str, locale: Optional[str] = None) -> str:
    return f"{locale}{PATH_SEP}{name}" if locale else name


def split_path(path: str) -> tuple[Optional[str], str]:
    if PATH_SEP in path:
        locale, name = path.split(PATH_SEP, 1)
        return locale, name
    return None, path


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def copy_value(value: FieldValue) -> FieldValue:
    # # Controls never alias the store's value
    return copy.deepcopy(value)
