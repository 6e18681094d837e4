# # Select widget: one value, or several when the field is "multiple".

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from rich.text import Text

from ..context import LocaleContext
from ..fields import FieldDescriptor, FieldValue, is_sequence
from ..validation.types import ValidationError, ValidationKind
from .base import ControlProps, WidgetDefinition, control_frame, options_schema
from .registry import register_widget

SCHEMA = options_schema(
    {
        "options": {
            "type": "array",
            "minItems": 1,
            "items": {
                "anyOf": [
                    {"type": ["string", "number"]},
                    {
                        "type": "object",
                        "properties": {"label": {"type": "string"}, "value": {"type": ["string", "number"]}},
                        "required": ["label", "value"],
                    },
                ]
            },
        },
    },
    required=["options"],
)


def option_labels(descriptor: FieldDescriptor) -> List[Tuple[Any, str]]:
    # # (value, label) pairs; chosen values are matched by equality since items may be unhashable
    out: List[Tuple[Any, str]] = []
    for opt in descriptor.options.get("options", []):
        if isinstance(opt, dict):
            out.append((opt["value"], str(opt["label"])))
        else:
            out.append((opt, str(opt)))
    return out


def _label_for(labels: List[Tuple[Any, str]], value: Any) -> Optional[str]:
    for v, label in labels:
        if v == value:
            return label
    return None


def _selected(value: FieldValue) -> List[Any]:
    if value is None or value == "":
        return []
    return list(value) if is_sequence(value) else [value]


def select_control(props: ControlProps):
    labels = option_labels(props.descriptor)
    chosen = _selected(props.value)
    lines = Text()
    for v, label in labels:
        lines.append(("(x) " if v in chosen else "( ) ") + label + "\n")
    return control_frame(props, lines)


def select_preview(descriptor: FieldDescriptor, value: FieldValue) -> Text:
    labels = option_labels(descriptor)
    return Text(", ".join(_label_for(labels, v) or str(v) for v in _selected(value)))


def validate_select(descriptor: FieldDescriptor, value: FieldValue, ctx: LocaleContext):
    # # Cardinality is checked by the engine; this only checks membership
    if not descriptor.multiple and is_sequence(value):
        return ValidationError(ValidationKind.TYPE_MISMATCH, ctx.t("single_value", field_label=descriptor.display_label))
    labels = option_labels(descriptor)
    bad = [v for v in _selected(value) if _label_for(labels, v) is None]
    if bad:
        return ValidationError(
            ValidationKind.CUSTOM,
            ctx.t("invalid_option", field_label=descriptor.display_label, value=", ".join(str(v) for v in bad)),
        )
    return False


@register_widget("select")
def select_widget() -> WidgetDefinition:
    return WidgetDefinition(
        name="select", control=select_control, preview=select_preview, validator=validate_select, schema=SCHEMA
    )
