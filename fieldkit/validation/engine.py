# # Validation engine: structural checks first, then the widget's own validator.

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Iterator, List, Optional, TYPE_CHECKING

from ..context import LocaleContext
from ..fields import FieldDescriptor, FieldValue
from .types import ValidationError, ValidationKind
from .validations import validate_cardinality, validate_required, validate_type

if TYPE_CHECKING:
    from ..widgets.base import WidgetDefinition

log = logging.getLogger(__name__)

STRUCTURAL_CHECKS = (validate_required, validate_type, validate_cardinality)


def _structural(descriptor: FieldDescriptor, value: FieldValue, ctx: LocaleContext) -> Optional[ValidationError]:
    for check in STRUCTURAL_CHECKS:
        err = check(descriptor, value, ctx)
        if err is not None:
            return err
    return None


def _normalize(result: Any, descriptor: FieldDescriptor) -> List[ValidationError]:
    # # Validators may answer False/None (valid), one error, or several
    if result is None or result is False or result is True:
        return []
    if isinstance(result, ValidationError):
        return [result]
    if isinstance(result, (list, tuple)):
        out = []
        for item in result:
            if not isinstance(item, ValidationError):
                raise TypeError(f"Validator for {descriptor.name!r} returned a non-error item: {item!r}")
            out.append(item)
        return out
    raise TypeError(f"Validator for {descriptor.name!r} returned {type(result).__name__}")


def validate(
    descriptor: FieldDescriptor,
    value: FieldValue,
    widget: "WidgetDefinition",
    ctx: Optional[LocaleContext] = None,
    on_deferred: Optional[Callable[[], None]] = None,
) -> Iterator[ValidationError]:
    """
    Lazily yield the errors for one field value.

    The first structural failure (required, type, cardinality) is the only
    error reported; the widget validator runs only when all of them pass.
    An asynchronous widget validator raises TypeError unless ``on_deferred``
    is given: the validator is then skipped, ``on_deferred`` is called, and the
    result is left to validate_async().
    """
    ctx = ctx or LocaleContext()
    err = _structural(descriptor, value, ctx)
    if err is not None:
        yield err
        return

    result = widget.validator(descriptor, value, ctx)
    if inspect.isawaitable(result):
        if inspect.iscoroutine(result):
            result.close()
        if on_deferred is not None:
            log.debug("Deferring async validator for %s", descriptor.name)
            on_deferred()
            return
        raise TypeError(f"Validator for widget {widget.name!r} is asynchronous; use validate_async()")
    yield from _normalize(result, descriptor)


async def validate_async(
    descriptor: FieldDescriptor,
    value: FieldValue,
    widget: "WidgetDefinition",
    ctx: Optional[LocaleContext] = None,
) -> List[ValidationError]:
    ctx = ctx or LocaleContext()
    err = _structural(descriptor, value, ctx)
    if err is not None:
        return [err]

    result = widget.validator(descriptor, value, ctx)
    if inspect.isawaitable(result):
        result = await result
    return _normalize(result, descriptor)


def custom_error(message: str) -> ValidationError:
    return ValidationError(ValidationKind.CUSTOM, message)
