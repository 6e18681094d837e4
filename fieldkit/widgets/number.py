# # Number widget: int or float values, chosen by the "value_type" option.

from __future__ import annotations

from rich.text import Text

from ..context import LocaleContext
from ..fields import FieldDescriptor, FieldValue
from ..validation.types import ValidationError, ValidationKind
from .base import ControlProps, WidgetDefinition, control_frame, options_schema
from .registry import register_widget

SCHEMA = options_schema(
    {
        "value_type": {"enum": ["int", "float"]},
        "step": {"type": "number", "exclusiveMinimum": 0},
    }
)


def _is_number(value: FieldValue, value_type: str) -> bool:
    if isinstance(value, bool):
        return False
    if value_type == "int":
        return isinstance(value, int)
    return isinstance(value, (int, float))


def number_control(props: ControlProps):
    shown = "" if props.value is None else str(props.value)
    return control_frame(props, Text(shown, justify="right"))


def number_preview(descriptor: FieldDescriptor, value: FieldValue) -> Text:
    return Text("" if value is None else str(value))


def validate_number(descriptor: FieldDescriptor, value: FieldValue, ctx: LocaleContext):
    if value is None or value == "":
        return False
    if not _is_number(value, str(descriptor.options.get("value_type", "float"))):
        return ValidationError(ValidationKind.TYPE_MISMATCH, ctx.t("not_a_number", field_label=descriptor.display_label))
    return False


@register_widget("number")
def number_widget() -> WidgetDefinition:
    return WidgetDefinition(
        name="number", control=number_control, preview=number_preview, validator=validate_number, schema=SCHEMA
    )
