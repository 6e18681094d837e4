# # Locale context handed to validators: active locale + message lookup.

from __future__ import annotations

import dataclasses
from typing import Any, Dict

MESSAGES: Dict[str, str] = {
    "required": "{field_label} is required.",
    "type_sequence": "{field_label} must be a list of values.",
    "range_count": "{field_label} must have between {min_count} and {max_count} item(s).",
    "range_count_exact": "{field_label} must have exactly {count} item(s).",
    "range_min": "{field_label} must be at least {min_count} item(s).",
    "range_max": "{field_label} must be {max_count} or less item(s).",
    "not_a_number": "{field_label} must be a number.",
    "not_a_string": "{field_label} must be text.",
    "not_a_boolean": "{field_label} must be true or false.",
    "not_an_object": "{field_label} must be a group of fields.",
    "invalid_option": "{field_label} has an invalid option: {value}.",
    "single_value": "{field_label} takes a single value, not a list.",
    "unknown_widget": "{field_label} uses an unsupported widget type: {widget}.",
    "pattern": "{field_label} does not match the required pattern.",
}


@dataclasses.dataclass
class LocaleContext:
    locale: str = "en"
    default_locale: str = "en"
    messages: Dict[str, str] = dataclasses.field(default_factory=lambda: dict(MESSAGES))

    @property
    def is_default_locale(self) -> bool:
        return self.locale == self.default_locale

    def t(self, key: str, **params: Any) -> str:
        template = self.messages.get(key)
        if template is None:
            return key
        return template.format(**params)
