import pytest

from fieldkit.errors import ControlAlreadyMounted, ControlNotMounted
from fieldkit.fields import FieldDescriptor, I18nMode
from fieldkit.sync import ControlArena, ControlInstance, ControlState

TITLE = FieldDescriptor(name="title", widget="string")
DUP_TITLE = FieldDescriptor(name="title", widget="string", i18n=I18nMode.DUPLICATE)


def _mounted(descriptor, value, is_source=True) -> ControlInstance:
    inst = ControlInstance(path="title", descriptor=descriptor, is_duplicate_source=is_source)
    inst.mount(value)
    return inst


def test_seed_is_captured_once():
    inst = _mounted(TITLE, "V0")
    assert inst.state == ControlState.SEEDED

    assert inst.receive_external("V1") is False
    assert inst.buffered_value == "V0"
    assert not inst.dirty


def test_translate_mode_also_seeds_once():
    inst = _mounted(FieldDescriptor(name="title", widget="string", i18n=I18nMode.TRANSLATE), "V0", is_source=False)
    inst.receive_external("V1")
    assert inst.buffered_value == "V0"


def test_duplicate_target_tracks_every_external_update():
    inst = _mounted(DUP_TITLE, "V0", is_source=False)
    assert inst.tracks_external

    assert inst.edit("local edit")
    assert inst.dirty and inst.state == ControlState.EDITED

    assert inst.receive_external("V1") is True
    assert inst.buffered_value == "V1"
    assert not inst.dirty
    assert inst.state == ControlState.SEEDED

    inst.receive_external("V2")
    assert inst.buffered_value == "V2"


def test_duplicate_source_keeps_one_time_seed():
    inst = _mounted(DUP_TITLE, "V0", is_source=True)
    assert not inst.tracks_external
    inst.receive_external("V1")
    assert inst.buffered_value == "V0"


def test_edit_with_same_value_is_not_a_change():
    inst = _mounted(TITLE, "V0")
    assert inst.edit("V0") is False
    assert inst.state == ControlState.SEEDED
    assert not inst.dirty


def test_buffer_is_a_copy_of_the_external_value():
    external = ["a", "b"]
    inst = _mounted(FieldDescriptor(name="tags", widget="list"), external)
    external.append("c")
    assert inst.buffered_value == ["a", "b"]


def test_mark_committed_clears_dirty_only_for_matching_value():
    inst = _mounted(TITLE, "V0")
    inst.edit("V1")
    inst.mark_committed("something else")
    assert inst.dirty
    inst.mark_committed("V1")
    assert not inst.dirty


def test_unmounted_control_rejects_operations():
    inst = _mounted(TITLE, "V0")
    inst.unmount()
    assert inst.state == ControlState.UNMOUNTED
    with pytest.raises(ControlNotMounted):
        inst.edit("V1")
    with pytest.raises(ControlNotMounted):
        inst.receive_external("V1")


def test_uninitialized_control_rejects_edits():
    inst = ControlInstance(path="title", descriptor=TITLE)
    with pytest.raises(ControlNotMounted):
        inst.edit("x")


def test_arena_lifecycle():
    arena = ControlArena()
    inst = arena.mount("en/title", TITLE, "V0")
    assert arena.get("en/title") is inst
    assert "en/title" in arena and len(arena) == 1

    with pytest.raises(ControlAlreadyMounted):
        arena.mount("en/title", TITLE, "V0")

    arena.unmount("en/title")
    assert inst.state == ControlState.UNMOUNTED
    assert arena.paths() == []
    with pytest.raises(ControlNotMounted):
        arena.get("en/title")
    with pytest.raises(ControlNotMounted):
        arena.unmount("en/title")
