# # Placeholder widget: stands in for a field whose widget type could not be resolved.

from __future__ import annotations

from rich.text import Text

from ..fields import FieldDescriptor, FieldValue
from .base import ControlProps, WidgetDefinition, control_frame
from .registry import register_widget


def placeholder_control(props: ControlProps):
    return control_frame(props, Text(f"Unsupported widget type: {props.descriptor.widget}", style="yellow"))


def placeholder_preview(descriptor: FieldDescriptor, value: FieldValue) -> Text:
    return Text(f"<{descriptor.widget}>", style="dim")


@register_widget("placeholder")
def placeholder_widget() -> WidgetDefinition:
    return WidgetDefinition(name="placeholder", control=placeholder_control, preview=placeholder_preview)
