"""Calculator Catalog tests: uniqueness, lookups and name resolution.

Tests cover:
    - Default catalog size, unique names and slugs, stable order
    - Exact name lookup vs case-insensitive resolve_names
    - Duplicate detection at construction
"""

import pytest

from homecalc.core.catalog import (
    DEFAULT_CALCULATORS,
    CalculatorCatalog,
    CalculatorDescriptor,
    default_catalog,
)
from homecalc.core.domain_types import CalculatorCategory


def test_default_catalog_has_every_calculator():
    catalog = default_catalog()
    assert len(catalog) == 31
    assert len(set(catalog.names())) == 31
    assert len({d.slug for d in catalog}) == 31


def test_order_is_stable():
    assert default_catalog().names() == [d.name for d in DEFAULT_CALCULATORS]


def test_exact_lookups():
    catalog = default_catalog()
    assert catalog.has_name("Paint Coverage Calculator")
    assert not catalog.has_name("paint coverage calculator")
    assert catalog.by_slug("paint-coverage").name == "Paint Coverage Calculator"
    assert catalog.by_name("Nope") is None


def test_resolve_names_is_case_insensitive_and_drops_unmatched():
    resolved = default_catalog().resolve_names([
        "decking materials calculator", "Flux Capacitor", " Concrete Slab Calculator ",
        "DECKING MATERIALS CALCULATOR",
    ])
    assert [d.slug for d in resolved] == ["decking-calculator", "concrete-slab-calculator"]


def test_in_category():
    gardening = default_catalog().in_category(CalculatorCategory.GARDENING)
    assert {d.name for d in gardening} == {
        "Soil & Mulch Calculator", "Fertilizer Needs Calculator",
    }


def test_duplicate_name_rejected():
    d = CalculatorDescriptor("Tile Calculator", "tile", "x", CalculatorCategory.OTHER)
    dup = CalculatorDescriptor("Tile Calculator", "tile-2", "y", CalculatorCategory.OTHER)
    with pytest.raises(ValueError, match="name"):
        CalculatorCatalog([d, dup])


def test_duplicate_slug_rejected():
    d = CalculatorDescriptor("A", "same", "x", CalculatorCategory.OTHER)
    dup = CalculatorDescriptor("B", "same", "y", CalculatorCategory.OTHER)
    with pytest.raises(ValueError, match="slug"):
        CalculatorCatalog([d, dup])


def test_to_dict_uses_category_label():
    d = default_catalog().by_slug("tile-calculator")
    assert d.to_dict()["category"] == "Home Improvement"
