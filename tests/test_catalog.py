from catalog import BOROUGHS, FORMAT_OPTIONS, SURFACE_TYPES, select_options
from presentation import FIELD_ICONS


def test_select_options_adds_blank_and_other():
    assert select_options(FORMAT_OPTIONS) == ["", "5v5", "7v7", "11v11", "Other"]


def test_select_options_drops_duplicates():
    assert select_options(["A", "Other", "A"]) == ["", "A", "Other"]


def test_known_values():
    assert len(BOROUGHS) == len(set(BOROUGHS)) == 27
    assert "Verdun" in BOROUGHS
    assert set(SURFACE_TYPES) == set(FIELD_ICONS)
