# # Boolean widget: a toggle.

from __future__ import annotations

from rich.text import Text

from ..context import LocaleContext
from ..fields import FieldDescriptor, FieldValue
from ..validation.types import ValidationError, ValidationKind
from .base import ControlProps, WidgetDefinition, control_frame
from .registry import register_widget


def boolean_control(props: ControlProps):
    mark = "[x]" if props.value else "[ ]"
    return control_frame(props, Text(mark))


def boolean_preview(descriptor: FieldDescriptor, value: FieldValue) -> Text:
    return Text("yes" if value else "no")


def validate_boolean(descriptor: FieldDescriptor, value: FieldValue, ctx: LocaleContext):
    if value is not None and not isinstance(value, bool):
        return ValidationError(ValidationKind.TYPE_MISMATCH, ctx.t("not_a_boolean", field_label=descriptor.display_label))
    return False


@register_widget("boolean")
def boolean_widget() -> WidgetDefinition:
    return WidgetDefinition(name="boolean", control=boolean_control, preview=boolean_preview, validator=validate_boolean)
