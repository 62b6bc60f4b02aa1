import pytest

from topology.taxonomy import (
    Category,
    Taxonomy,
    TaxonomyError,
    load_taxonomy,
    parse_taxonomy,
)


def test_taxonomy_roundtrip():
    tax = Taxonomy(
        "test",
        "1.0",
        [
            Category("Alpha", ["foo", "bar"]),
            Category("Beta", ["baz"], [Category("Gamma", ["qux"])]),
        ],
    )
    parsed = parse_taxonomy(tax.to_json())
    assert len(parsed.categories) == 2
    flat = parsed.flatten()
    assert len(flat) == 3
    assert [p for p, _ in flat] == ["Alpha", "Beta", "Beta > Gamma"]
    assert parsed == tax


def test_empty_taxonomy():
    tax = Taxonomy("empty", "1.0", [])
    assert tax.flatten() == []
    assert tax.category_names() == []


def test_single_category_no_children():
    tax = Taxonomy("test", "1.0", [Category("Solo", ["one"])])
    assert tax.flatten() == [("Solo", ["one"])]


def test_deeply_nested_children():
    tax = Taxonomy(
        "deep",
        "1.0",
        [Category("L1", [], [Category("L2", [], [Category("L3", ["deep"])])])],
    )
    flat = tax.flatten()
    assert len(flat) == 3
    assert flat[2] == ("L1 > L2 > L3", ["deep"])


def test_category_names_returns_top_level_only():
    tax = Taxonomy(
        "test",
        "1.0",
        [Category("A", [], [Category("A1", [])]), Category("B", [])],
    )
    assert tax.category_names() == ["A", "B"]


def test_parse_taxonomy_invalid_json():
    with pytest.raises(TaxonomyError):
        parse_taxonomy("not json")


def test_parse_taxonomy_missing_fields():
    with pytest.raises(TaxonomyError):
        parse_taxonomy('{"name": "test"}')


def test_parse_children_default_to_empty():
    tax = parse_taxonomy(
        '{"name": "t", "version": "1", "categories": [{"name": "C", "keywords": ["k"]}]}'
    )
    assert tax.categories[0].children == []
    assert tax.flatten() == [("C", ["k"])]


def test_parse_rejects_category_without_keywords():
    with pytest.raises(TaxonomyError):
        parse_taxonomy('{"name": "t", "version": "1", "categories": [{"name": "C"}]}')


def test_load_taxonomy_nonexistent_file(tmp_path):
    with pytest.raises(TaxonomyError):
        load_taxonomy(tmp_path / "missing" / "taxonomy.json")


def test_load_taxonomy_from_file(tmp_path):
    path = tmp_path / "taxonomy.json"
    tax = Taxonomy("file", "3.1", [Category("X", ["y"])])
    path.write_text(tax.to_json(), encoding="utf-8")
    assert load_taxonomy(path) == tax


def test_serialization_preserves_keywords():
    tax = Taxonomy("test", "2.0", [Category("Cat", ["a", "b", "c"])])
    parsed = parse_taxonomy(tax.to_json())
    assert parsed.categories[0].keywords == ["a", "b", "c"]
    assert parsed.version == "2.0"