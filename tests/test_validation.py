import asyncio

import pytest
from rich.text import Text

from fieldkit.context import LocaleContext
from fieldkit.fields import FieldDescriptor
from fieldkit.validation import engine
from fieldkit.validation.types import ValidationError, ValidationKind
from fieldkit.validation.validations import validate_cardinality, validate_min_max
from fieldkit.widgets.base import WidgetDefinition
from fieldkit.widgets.registry import get_widget


def _tags(**kw) -> FieldDescriptor:
    base = dict(
        name="tags",
        widget="select",
        multiple=True,
        min=2,
        max=4,
        options={"options": ["a", "b", "c", "d", "e"]},
    )
    base.update(kw)
    return FieldDescriptor(**base)


def _kinds(errors):
    return [e.kind for e in errors]


def test_min_and_max_violations_for_multiple_field():
    d = _tags()
    select = get_widget("select")

    assert _kinds(engine.validate(d, ["a"], select)) == [ValidationKind.MIN_VIOLATION]
    assert _kinds(engine.validate(d, ["a", "b", "c", "d", "e"], select)) == [ValidationKind.MAX_VIOLATION]
    assert list(engine.validate(d, ["a", "b"], select)) == []


def test_cardinality_is_noop_for_singletons():
    d = _tags(multiple=False)
    ctx = LocaleContext()

    assert validate_cardinality(d, "a", ctx) is None
    assert list(engine.validate(d, "a", get_widget("select"))) == []


def test_cardinality_ignores_scalar_where_sequence_expected():
    assert validate_cardinality(_tags(), "a", LocaleContext()) is None


def test_scalar_for_multiple_field_is_type_mismatch():
    errors = list(engine.validate(_tags(), "a", get_widget("select")))
    assert _kinds(errors) == [ValidationKind.TYPE_MISMATCH]


def test_required_missing_short_circuits_cardinality():
    d = _tags(required=True)
    errors = list(engine.validate(d, [], get_widget("select")))
    assert _kinds(errors) == [ValidationKind.REQUIRED_MISSING]
    assert errors[0].message == "tags is required."


def test_empty_optional_list_still_counts_against_min():
    errors = list(engine.validate(_tags(), [], get_widget("select")))
    assert _kinds(errors) == [ValidationKind.MIN_VIOLATION]


def test_min_max_messages_use_label_and_bounds():
    ctx = LocaleContext()
    assert validate_min_max(ctx, "Tags", ["a"], 2, 4).message == "Tags must have between 2 and 4 item(s)."
    assert validate_min_max(ctx, "Tags", ["a"], 2, 2).message == "Tags must have exactly 2 item(s)."
    assert validate_min_max(ctx, "Tags", ["a"], 2, None).message == "Tags must be at least 2 item(s)."
    assert validate_min_max(ctx, "Tags", ["a", "b"], None, 1).message == "Tags must be 1 or less item(s)."
    assert validate_min_max(ctx, "Tags", ["a", "b"], None, None) is None


def test_label_preferred_over_name_in_messages():
    d = _tags(label="Categories")
    [err] = engine.validate(d, ["a"], get_widget("select"))
    assert "Categories" in err.message
    assert "2" in err.message and "4" in err.message


def _widget(validator) -> WidgetDefinition:
    return WidgetDefinition(
        name="custom", control=lambda props: Text(""), preview=lambda d, v: Text(""), validator=validator
    )


def test_widget_validator_can_report_several_errors():
    d = FieldDescriptor(name="body", widget="custom")
    errs = [ValidationError(ValidationKind.CUSTOM, "one"), ValidationError(ValidationKind.CUSTOM, "two")]
    out = list(engine.validate(d, "x", _widget(lambda d, v, ctx: errs)))
    assert [e.message for e in out] == ["one", "two"]


def test_widget_validator_skipped_after_structural_failure():
    calls = []

    def validator(d, v, ctx):
        calls.append(v)
        return False

    d = FieldDescriptor(name="body", widget="custom", required=True)
    out = list(engine.validate(d, "", _widget(validator)))
    assert _kinds(out) == [ValidationKind.REQUIRED_MISSING]
    assert calls == []


def test_validation_is_lazy():
    calls = []

    def validator(d, v, ctx):
        calls.append(v)
        return False

    gen = engine.validate(FieldDescriptor(name="body", widget="custom"), "x", _widget(validator))
    assert calls == []
    list(gen)
    assert calls == ["x"]


def test_bad_validator_result_is_a_type_error():
    d = FieldDescriptor(name="body", widget="custom")
    with pytest.raises(TypeError):
        list(engine.validate(d, "x", _widget(lambda d, v, ctx: "nope")))


async def _slow_unique(d, value, ctx):
    await asyncio.sleep(0)
    return engine.custom_error("already taken") if value == "taken" else False


def test_async_validator_requires_validate_async():
    d = FieldDescriptor(name="slug", widget="custom")
    with pytest.raises(TypeError, match="validate_async"):
        list(engine.validate(d, "taken", _widget(_slow_unique)))


def test_async_validator_can_be_deferred():
    deferred = []
    d = FieldDescriptor(name="slug", widget="custom")
    out = list(engine.validate(d, "taken", _widget(_slow_unique), on_deferred=lambda: deferred.append(True)))
    assert out == []
    assert deferred == [True]


def test_validate_async_awaits_validator():
    d = FieldDescriptor(name="slug", widget="custom")
    taken = asyncio.run(engine.validate_async(d, "taken", _widget(_slow_unique)))
    free = asyncio.run(engine.validate_async(d, "free", _widget(_slow_unique)))
    assert [e.message for e in taken] == ["already taken"]
    assert free == []


def test_validate_async_runs_structural_checks_first():
    d = FieldDescriptor(name="slug", widget="custom", required=True)
    out = asyncio.run(engine.validate_async(d, None, _widget(_slow_unique)))
    assert _kinds(out) == [ValidationKind.REQUIRED_MISSING]
