# # Widget contract: definition record, control props, and the callable shapes plugins supply.

from __future__ import annotations

import dataclasses
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence, Union

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from ..context import LocaleContext
from ..fields import FieldDescriptor, FieldValue
from ..validation.types import ValidationError

ValidatorResult = Union[None, bool, ValidationError, Sequence[ValidationError]]
Validator = Callable[
    [FieldDescriptor, FieldValue, LocaleContext],
    Union[ValidatorResult, Awaitable[ValidatorResult]],
]
Preview = Callable[[FieldDescriptor, FieldValue], Any]


@dataclasses.dataclass
class ControlProps:
    descriptor: FieldDescriptor
    external_value: FieldValue
    value: FieldValue
    on_change: Callable[[FieldValue], None]
    disabled: bool = False
    is_duplicate_target: bool = False
    errors: List[ValidationError] = dataclasses.field(default_factory=list)


Control = Callable[[ControlProps], Any]


def no_validation(descriptor: FieldDescriptor, value: FieldValue, ctx: LocaleContext) -> ValidatorResult:
    return False


@dataclasses.dataclass(frozen=True)
class WidgetDefinition:
    name: str
    control: Control
    preview: Preview
    validator: Validator = no_validation
    schema: Mapping[str, Any] = dataclasses.field(default_factory=dict)
    # # Compound widgets list their nested field descriptors so options can be checked recursively
    subfields: Optional[Callable[[FieldDescriptor], List[FieldDescriptor]]] = None


def options_schema(properties: Optional[Dict[str, Any]] = None, required: Sequence[str] = ()) -> Dict[str, Any]:
    # # Widget options are open-ended: unknown keys are allowed, known keys are typed
    schema: Dict[str, Any] = {"type": "object", "properties": dict(properties or {})}
    if required:
        schema["required"] = list(required)
    return schema


def control_frame(props: ControlProps, body: Any) -> Any:
    # # Shared chrome for builtin controls: label title, body, then one line per error
    d = props.descriptor
    title = d.display_label + (" *" if d.required else "")
    parts: List[Any] = [body]
    for err in props.errors:
        parts.append(Text(err.message, style="red"))
    if props.is_duplicate_target:
        parts.append(Text("mirrors the default locale", style="dim"))

    border = "red" if props.errors else ("grey50" if props.disabled else "cyan")
    return Panel(Group(*parts), title=title, title_align="left", border_style=border)
