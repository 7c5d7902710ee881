import pytest
from chemistry.elements_data import (
    all_elements, get_element, get_element_by_number, elements_by_category, periodic_grid, load_elements,
)
from chemistry.compounds import lookup_compound, known_formulas, is_canonical


def test_catalog_has_118_ordered_elements():
    elements = all_elements()
    assert len(elements) == 118
    assert [e.atomic_number for e in elements] == list(range(1, 119))
    assert len({e.symbol for e in elements}) == 118


def test_lookup_by_symbol():
    na = get_element("Na")
    assert na.name == "Sodium"
    assert na.is_metal is True
    assert na.valence_electrons == 1
    assert get_element("He").electronegativity is None
    assert get_element_by_number(17).symbol == "Cl"


def test_lookup_unknown_is_none():
    assert get_element("Xx") is None
    # symbols are case-sensitive
    assert get_element("na") is None
    assert get_element_by_number(119) is None


def test_elements_are_read_only():
    h = get_element("H")
    with pytest.raises(AttributeError):
        h.valence_electrons = 8
    assert get_element("H") is h


def test_noble_gases():
    symbols = [e.symbol for e in elements_by_category("noble-gas")]
    assert symbols == ["He", "Ne", "Ar", "Kr", "Xe", "Rn"]


def test_periodic_grid_positions():
    cells = {el.symbol: (row, col) for el, row, col in periodic_grid()}
    assert len(cells) == 118
    assert cells["H"] == (1, 1)
    assert cells["He"] == (1, 18)
    assert cells["Fe"] == (4, 8)
    assert cells["La"] == (9, 3)
    assert cells["Lu"] == (9, 17)
    assert cells["Ac"] == (10, 3)
    assert cells["Lr"] == (10, 17)
    assert len(set(cells.values())) == 118


def test_load_elements_missing_file(tmp_path):
    with pytest.raises(RuntimeError):
        load_elements(tmp_path / "missing.json")
    # the default catalog is still usable afterwards
    assert get_element("O").name == "Oxygen"


def test_compound_lookup_exact_match():
    water = lookup_compound("H2O")
    assert water.name == "Water"
    assert water.geometry == "Bent"
    assert water.bond_angle == "104.5°"
    salt = lookup_compound("NaCl")
    assert salt.name == "Sodium Chloride (Table Salt)"
    assert lookup_compound("h2o") is None
    assert lookup_compound("OH2") is None
    assert lookup_compound("") is None


def test_compound_keys_are_canonical():
    formulas = known_formulas()
    assert len(formulas) == 34
    assert all(is_canonical(f) for f in formulas)
