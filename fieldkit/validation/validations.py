# # Structural checks shared by every widget: required, sequence type, min/max cardinality.

from __future__ import annotations

from typing import Any, Optional, Sized

from ..context import LocaleContext
from ..fields import FieldDescriptor, is_empty, is_sequence
from .types import ValidationError, ValidationKind


def validate_required(descriptor: FieldDescriptor, value: Any, ctx: LocaleContext) -> Optional[ValidationError]:
    if descriptor.required and is_empty(value):
        return ValidationError(
            ValidationKind.REQUIRED_MISSING,
            ctx.t("required", field_label=descriptor.display_label),
        )
    return None


def validate_type(descriptor: FieldDescriptor, value: Any, ctx: LocaleContext) -> Optional[ValidationError]:
    # # Empty values belong to the required check
    if descriptor.multiple and not is_empty(value) and not is_sequence(value):
        return ValidationError(
            ValidationKind.TYPE_MISMATCH,
            ctx.t("type_sequence", field_label=descriptor.display_label),
        )
    return None


def validate_min_max(
    ctx: LocaleContext,
    field_label: str,
    value: Sized,
    min: Optional[int] = None,
    max: Optional[int] = None,
) -> Optional[ValidationError]:
    count = len(value)
    too_few = min is not None and count < min
    too_many = max is not None and count > max
    if not (too_few or too_many):
        return None

    kind = ValidationKind.MIN_VIOLATION if too_few else ValidationKind.MAX_VIOLATION
    if min is not None and max is not None:
        if min == max:
            message = ctx.t("range_count_exact", field_label=field_label, count=min)
        else:
            message = ctx.t("range_count", field_label=field_label, min_count=min, max_count=max)
    elif too_few:
        message = ctx.t("range_min", field_label=field_label, min_count=min)
    else:
        message = ctx.t("range_max", field_label=field_label, max_count=max)
    return ValidationError(kind, message)


def validate_cardinality(descriptor: FieldDescriptor, value: Any, ctx: LocaleContext) -> Optional[ValidationError]:
    # # Singletons and scalars have no cardinality; the type check owns scalar-for-list
    if not descriptor.multiple or not is_sequence(value):
        return None
    return validate_min_max(ctx, descriptor.display_label, value, descriptor.min, descriptor.max)
