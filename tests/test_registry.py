import pytest
from rich.text import Text

from fieldkit.errors import DuplicateWidget, RegistrySealed, UnknownWidget
from fieldkit.widgets import registry as R
from fieldkit.widgets.base import WidgetDefinition


def _definition(name: str) -> WidgetDefinition:
    return WidgetDefinition(name=name, control=lambda props: Text(""), preview=lambda d, v: Text(str(v)))


def test_duplicate_registration_keeps_first_definition():
    reg = R.WidgetRegistry()
    first = _definition("text")
    reg.register("text", first)

    with pytest.raises(DuplicateWidget):
        reg.register("text", _definition("text"))

    assert reg.resolve("text") is first
    assert len(reg) == 1


def test_unknown_widget_lists_available_names():
    reg = R.WidgetRegistry()
    reg.register("b", _definition("b"))
    reg.register("a", _definition("a"))

    with pytest.raises(UnknownWidget) as exc:
        reg.resolve("markdown")

    assert exc.value.name == "markdown"
    assert exc.value.available == ["a", "b"]
    assert "Available: ['a', 'b']" in str(exc.value)


def test_sealed_registry_rejects_writes_but_still_resolves():
    reg = R.WidgetRegistry()
    reg.register("text", _definition("text"))
    reg.seal()

    with pytest.raises(RegistrySealed):
        reg.register("other", _definition("other"))
    assert reg.sealed
    assert "text" in reg
    assert "other" not in reg


def test_default_registry_has_builtins_and_is_sealed(registry):
    expected = {"boolean", "list", "number", "object", "placeholder", "select", "string", "text"}
    assert expected.issubset(set(registry.names()))
    assert registry.sealed
    assert R.get_widget("select").name == "select"
    assert R.default_registry() is registry


def test_default_registry_cannot_take_extras_after_startup(registry):
    with pytest.raises(RegistrySealed):
        R.init_default_registry(extra={"late": _definition("late")})


def test_registry_iterates_sorted_names():
    reg = R.WidgetRegistry()
    for name in ("zeta", "alpha"):
        reg.register(name, _definition(name))
    assert list(reg) == ["alpha", "zeta"]
