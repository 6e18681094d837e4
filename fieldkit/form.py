# # Form loader: supports both list-form and dict-form field definitions.

from __future__ import annotations

import dataclasses
import json
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, TYPE_CHECKING

from jsonschema import Draft7Validator

from .errors import FormConfigError, UnknownWidget
from .fields import FieldDescriptor, I18nMode, descriptor_from_dict, field_path
from .widgets.base import WidgetDefinition

if TYPE_CHECKING:
    from .widgets.registry import WidgetRegistry


@dataclasses.dataclass
class FormSpec:
    name: str = "form"
    locales: List[str] = dataclasses.field(default_factory=lambda: ["en"])
    default_locale: str = "en"
    fields: List[FieldDescriptor] = dataclasses.field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.locales:
            self.locales = [self.default_locale]
        if self.default_locale not in self.locales:
            raise FormConfigError(
                f"Default locale {self.default_locale!r} is not one of the form locales {self.locales}"
            )
        names = [f.name for f in self.fields]
        dupes = sorted({n for n in names if names.count(n) > 1})
        if dupes:
            raise FormConfigError("Duplicate field names", dupes)

    def field(self, name: str) -> FieldDescriptor:
        for f in self.fields:
            if f.name == name:
                return f
        raise KeyError(f"Unknown field: {name}. Available: {sorted(f.name for f in self.fields)}")

    def placements(self) -> Iterator[Tuple[str, Optional[str], FieldDescriptor]]:
        """Yield (path, locale, descriptor) for every control the form mounts."""
        for f in self.fields:
            if f.i18n == I18nMode.NONE:
                yield field_path(f.name), None, f
                continue
            for locale in self.locales:
                yield field_path(f.name, locale), locale, f


def _coerce_fields(raw: Any) -> List[FieldDescriptor]:
    # # List form: [{"name": "...", "widget": "...", ...}, ...]
    if isinstance(raw, list):
        out: List[FieldDescriptor] = []
        for entry in raw:
            if not isinstance(entry, dict):
                raise FormConfigError(f"Field entries must be objects, got {entry!r}")
            out.append(descriptor_from_dict(entry))
        return out

    # # Dict form: {"title": {"widget": "string"}, "tags": {...}}
    if isinstance(raw, dict):
        out = []
        for name, cfg in raw.items():
            if not isinstance(cfg, dict):
                raise FormConfigError(f"Field {name!r} must be an object, got {cfg!r}")
            out.append(descriptor_from_dict(cfg, name=str(name)))
        return out

    if raw is None:
        return []
    raise FormConfigError(f"'fields' must be a list or an object, got {type(raw).__name__}")


def form_from_dict(data: Dict[str, Any], default_locale: str = "en") -> FormSpec:
    locale = str(data.get("default_locale", default_locale))
    locales = [str(x) for x in (data.get("locales") or [locale])]
    return FormSpec(
        name=str(data.get("name", "form")),
        locales=locales,
        default_locale=locale,
        fields=_coerce_fields(data.get("fields")),
    )


def load_form(path: Path, default_locale: str = "en") -> FormSpec:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise FormConfigError(f"Form file {path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise FormConfigError(f"Form file {path} must contain a JSON object")
    return form_from_dict(data, default_locale=default_locale)


def _schema_problems(descriptor: FieldDescriptor, widget: WidgetDefinition) -> List[str]:
    if not widget.schema:
        return []
    # # The format checker rejects options declared "format": "regex" that do not compile
    validator = Draft7Validator(widget.schema, format_checker=Draft7Validator.FORMAT_CHECKER)
    return [
        f"{'.'.join(str(p) for p in err.path) or '<options>'}: {err.message}"
        for err in sorted(validator.iter_errors(dict(descriptor.options)), key=lambda e: [str(p) for p in e.path])
    ]


def check_field_options(
    descriptor: FieldDescriptor,
    widget: WidgetDefinition,
    registry: Optional["WidgetRegistry"] = None,
) -> None:
    """
    Validate a field's widget options against the widget's JSON Schema.

    Nested fields (object widgets) are resolved against ``registry`` and
    checked the same way; an unknown nested widget type is a config error.
    """
    problems = _schema_problems(descriptor, widget)
    if problems:
        raise FormConfigError(f"Invalid options for field {descriptor.name!r} ({widget.name})", problems)
    if widget.subfields is None:
        return

    if registry is None:
        from .widgets.registry import default_registry

        registry = default_registry()
    for sub in widget.subfields(descriptor):
        try:
            sub_widget = registry.resolve(sub.widget)
        except UnknownWidget as e:
            raise FormConfigError(f"Invalid nested field {descriptor.name}.{sub.name}", [str(e)]) from e
        check_field_options(sub, sub_widget, registry)
