# # List widget: an ordered sequence of plain values. Reordering is left to the host UI.

from __future__ import annotations

from rich.text import Text

from ..context import LocaleContext
from ..fields import FieldDescriptor, FieldValue, is_sequence
from ..validation.types import ValidationError, ValidationKind
from ..validation.validations import validate_min_max
from .base import ControlProps, WidgetDefinition, control_frame, options_schema
from .registry import register_widget

SCHEMA = options_schema({"summary": {"type": "string"}})


def _items(value: FieldValue) -> list:
    return list(value) if is_sequence(value) else []


def list_control(props: ControlProps):
    body = Text()
    for i, item in enumerate(_items(props.value), start=1):
        body.append(f"{i}. {item}\n")
    return control_frame(props, body)


def list_preview(descriptor: FieldDescriptor, value: FieldValue) -> Text:
    return Text("\n".join(f"- {item}" for item in _items(value)))


def validate_list(descriptor: FieldDescriptor, value: FieldValue, ctx: LocaleContext):
    if value is None:
        return False
    if not is_sequence(value):
        return ValidationError(ValidationKind.TYPE_MISMATCH, ctx.t("type_sequence", field_label=descriptor.display_label))
    # # A list is always a sequence, so min/max apply without the "multiple" flag
    if descriptor.multiple:
        return False
    return validate_min_max(ctx, descriptor.display_label, value, descriptor.min, descriptor.max) or False


@register_widget("list")
def list_widget() -> WidgetDefinition:
    return WidgetDefinition(name="list", control=list_control, preview=list_preview, validator=validate_list, schema=SCHEMA)
