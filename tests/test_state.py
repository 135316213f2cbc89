import pytest

from flagdriver import InvalidStatesInput, build_state_enum, select_active


def test_first_truthy_state_is_active():
    selection = select_active({"a": False, "b": True, "c": True})
    assert selection.name == "b"
    assert selection.index == 1
    assert selection.is_active


def test_no_truthy_state():
    selection = select_active({"a": False, "b": None})
    assert selection.name is None
    assert selection.index is None
    assert not selection.is_active


def test_empty_states():
    selection = select_active({})
    assert selection.name is None
    assert dict(selection.state_enum) == {}


def test_state_enum_follows_declaration_order():
    assert dict(build_state_enum({"z": True, "y": False, "x": False})) == {"z": 0, "y": 1, "x": 2}


def test_is_before():
    selection = select_active({"a": False, "b": True, "c": False})
    assert selection.is_before("c")
    assert not selection.is_before("b")
    assert not selection.is_before("a")
    assert not select_active({"a": False}).is_before("a")
    with pytest.raises(InvalidStatesInput):
        selection.is_before("missing")


def test_strict_mode_rejects_non_bool():
    with pytest.raises(InvalidStatesInput, match="strict"):
        select_active({"a": 1}, strict=True)
    assert select_active({"a": True}, strict=True).name == "a"


@pytest.mark.parametrize("states", [[("a", True)], {"": True}, {1: True}])
def test_malformed_states(states):
    with pytest.raises(InvalidStatesInput):
        select_active(states)
