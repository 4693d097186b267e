import pytest

from vermada.controls import Control
from vermada.lookup import LookupError_, LookupTable, WidgetType, create_default_lookups


@pytest.mark.parametrize(
    "name,value",
    [
        ("WT_BUTTON", WidgetType.BUTTON),
        ("WT_SELECT", WidgetType.SELECT),
        ("WT_INPUT", WidgetType.INPUT),
        ("left", Control.LEFT),
        ("right", Control.RIGHT),
        ("jump", Control.JUMP),
        ("restart", Control.RESTART),
        ("pause", Control.PAUSE),
    ],
)
def test_default_values(name, value):
    assert create_default_lookups().value_of(name) == value


def test_default_has_no_up_or_down():
    table = create_default_lookups()
    with pytest.raises(LookupError_):
        table.value_of("up")


def test_name_of_with_prefix():
    table = create_default_lookups()
    assert table.name_of("WT", WidgetType.INPUT) == "WT_INPUT"
    assert table.name_of("WT_", WidgetType.BUTTON) == "WT_BUTTON"
    assert table.name_of("l", Control.LEFT) == "left"


def test_name_of_prefix_mismatch_raises():
    table = create_default_lookups()
    with pytest.raises(LookupError_):
        table.name_of("r", Control.LEFT)


def test_value_of_is_exact_match():
    table = create_default_lookups()
    with pytest.raises(LookupError_):
        table.value_of("WT_BUTTO")


def test_lookup_error_is_builtin_lookup_error():
    with pytest.raises(LookupError):
        LookupTable().value_of("anything")


def test_first_registered_entry_wins():
    table = LookupTable()
    table.add("dup", 1)
    table.add("dup", 2)
    table.add("other", 1)
    assert table.value_of("dup") == 1
    assert table.name_of("", 1) == "dup"
    assert table.name_of("o", 1) == "other"


def test_round_trip_name_and_value():
    table = create_default_lookups()
    for name in ("WT_SELECT", "jump", "pause"):
        assert table.name_of(name, table.value_of(name)) == name