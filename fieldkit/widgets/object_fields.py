# # Object widget: a group of nested fields stored as a mapping.

from __future__ import annotations

from typing import Any, Dict, List, Optional, TYPE_CHECKING

from rich import box
from rich.table import Table
from rich.text import Text

from ..context import LocaleContext
from ..fields import FieldDescriptor, FieldValue, descriptor_from_dict
from ..validation.types import ValidationError, ValidationKind
from .base import ControlProps, WidgetDefinition, control_frame, options_schema
from .registry import register_widget

if TYPE_CHECKING:
    from .registry import WidgetRegistry

SCHEMA = options_schema(
    {
        "fields": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {"name": {"type": "string"}, "widget": {"type": "string"}},
                "required": ["name", "widget"],
            },
        },
        "collapsed": {"type": "boolean"},
    },
    required=["fields"],
)


def subfields(descriptor: FieldDescriptor) -> List[FieldDescriptor]:
    return [descriptor_from_dict(raw) for raw in descriptor.options.get("fields", [])]


def _as_mapping(value: FieldValue) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _table(reg: "WidgetRegistry", descriptor: FieldDescriptor, value: FieldValue) -> Table:
    data = _as_mapping(value)
    t = Table(box=box.SIMPLE, show_header=False, padding=(0, 1))
    t.add_column("field", style="bold", no_wrap=True)
    t.add_column("value", overflow="ellipsis")
    for sub in subfields(descriptor):
        preview = reg.resolve(sub.widget).preview if sub.widget in reg else None
        cell = preview(sub, data.get(sub.name)) if preview else Text(str(data.get(sub.name, "")))
        t.add_row(sub.display_label, cell)
    return t


def object_widget_for(registry: Optional["WidgetRegistry"] = None) -> WidgetDefinition:
    """
    Build the object widget with nested fields resolved against ``registry``.

    ``None`` means the process-wide default registry, looked up on use so the
    definition can be created while that registry is still being populated.
    """

    def reg() -> "WidgetRegistry":
        if registry is not None:
            return registry
        from .registry import default_registry

        return default_registry()

    def object_control(props: ControlProps):
        return control_frame(props, _table(reg(), props.descriptor, props.value))

    def object_preview(descriptor: FieldDescriptor, value: FieldValue) -> Table:
        return _table(reg(), descriptor, value)

    def validate_object(descriptor: FieldDescriptor, value: FieldValue, ctx: LocaleContext):
        from ..validation.engine import validate

        if value is None:
            return False
        if not isinstance(value, dict):
            return ValidationError(ValidationKind.TYPE_MISMATCH, ctx.t("not_an_object", field_label=descriptor.display_label))

        widgets = reg()
        errors: List[ValidationError] = []
        for sub in subfields(descriptor):
            if sub.widget not in widgets:
                errors.append(
                    ValidationError(
                        ValidationKind.CUSTOM,
                        ctx.t("unknown_widget", field_label=sub.display_label, widget=sub.widget),
                    )
                )
                continue
            errors.extend(validate(sub, value.get(sub.name), widgets.resolve(sub.widget), ctx))
        return errors

    return WidgetDefinition(
        name="object",
        control=object_control,
        preview=object_preview,
        validator=validate_object,
        schema=SCHEMA,
        subfields=subfields,
    )


@register_widget("object")
def object_widget() -> WidgetDefinition:
    return object_widget_for(None)
