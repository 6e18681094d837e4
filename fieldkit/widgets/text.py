# # Text widgets: "string" (single line) and "text" (multi-line).

from __future__ import annotations

import re

from rich.text import Text

from ..context import LocaleContext
from ..fields import FieldDescriptor, FieldValue
from ..validation.types import ValidationError, ValidationKind
from .base import ControlProps, WidgetDefinition, control_frame, options_schema
from .registry import register_widget

SCHEMA = options_schema(
    {
        "pattern": {"type": "string", "format": "regex"},
        "hint": {"type": "string"},
    }
)


def _as_text(value: FieldValue) -> str:
    return "" if value is None else str(value)


def text_control(props: ControlProps):
    return control_frame(props, Text(_as_text(props.value)))


def string_control(props: ControlProps):
    # # Single line: newlines are shown, not rendered
    return control_frame(props, Text(_as_text(props.value).replace("\n", "\\n"), no_wrap=True, overflow="ellipsis"))


def text_preview(descriptor: FieldDescriptor, value: FieldValue) -> Text:
    return Text(_as_text(value))


def validate_text(descriptor: FieldDescriptor, value: FieldValue, ctx: LocaleContext):
    if value is None:
        return False
    if not isinstance(value, str):
        return ValidationError(ValidationKind.TYPE_MISMATCH, ctx.t("not_a_string", field_label=descriptor.display_label))
    pattern = descriptor.options.get("pattern")
    if pattern and value and not re.search(pattern, value):
        return ValidationError(ValidationKind.CUSTOM, ctx.t("pattern", field_label=descriptor.display_label))
    return False


@register_widget("text")
def text_widget() -> WidgetDefinition:
    return WidgetDefinition(name="text", control=text_control, preview=text_preview, validator=validate_text, schema=SCHEMA)


@register_widget("string")
def string_widget() -> WidgetDefinition:
    return WidgetDefinition(name="string", control=string_control, preview=text_preview, validator=validate_text, schema=SCHEMA)
