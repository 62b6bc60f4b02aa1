import pytest

from topology.clustering import Linkage
from topology.discover import (
    DiscoverConfig,
    capitalize,
    classify_against_taxonomy,
    discover_taxonomy,
)
from topology.taxonomy import Category, Taxonomy, parse_taxonomy


def test_discover_separates_distinct_topics():
    texts = [
        "rust systems memory safety ownership borrow checker compiler",
        "rust performance zero cost abstractions concurrent safe compile",
        "cooking recipe pasta italian sauce ingredients kitchen chef",
        "cooking baking bread flour dessert restaurant dinner menu",
        "astronomy telescope star galaxy nebula planet cosmos universe",
        "astronomy observatory comet asteroid space sky solar orbit",
    ]
    config = DiscoverConfig(k=3, sample_size=100, label_terms=3, keywords_per_cluster=15)
    tax = discover_taxonomy(texts, config)
    assert len(tax.categories) >= 2
    for cat in tax.categories:
        assert cat.keywords
        assert cat.name
        assert len(cat.keywords) <= 15
    reparsed = parse_taxonomy(tax.to_json())
    assert len(reparsed.categories) == len(tax.categories)


def test_discover_empty_input():
    tax = discover_taxonomy([], DiscoverConfig())
    assert tax.categories == []
    assert tax.name == "discovered"
    assert tax.version == "auto"


def test_discover_single_item():
    tax = discover_taxonomy(["rust programming language"], DiscoverConfig())
    assert len(tax.categories) == 1
    assert set(tax.categories[0].keywords) == {"rust", "programming", "language"}


def test_discover_produces_categories():
    groups = [
        "alpha bravo charlie delta echo",
        "foxtrot golf hotel india juliet",
        "kilo lima mike november oscar",
    ]
    texts = [f"{groups[i % 3]} {i}" for i in range(30)]
    tax = discover_taxonomy(texts, DiscoverConfig(k=3, sample_size=100))
    assert tax.categories
    assert len(tax.categories) <= 3
    for cat in tax.categories:
        assert cat.keywords


def test_discover_respects_sample_size():
    texts = [f"word{i} common shared term" for i in range(20)]
    tax = discover_taxonomy(texts, DiscoverConfig(k=3, sample_size=5))
    assert 1 <= len(tax.categories) <= 3


def test_discover_two_items():
    tax = discover_taxonomy(
        ["alpha bravo charlie", "delta echo foxtrot"], DiscoverConfig(k=2)
    )
    assert 1 <= len(tax.categories) <= 2


def test_discover_taxonomy_serializable():
    texts = [f"topic word keyword term phrase {i}" for i in range(10)]
    tax = discover_taxonomy(texts, DiscoverConfig(k=2))
    parsed = parse_taxonomy(tax.to_json())
    assert len(parsed.categories) == len(tax.categories)
    assert parsed.name == "discovered"


@pytest.mark.parametrize("linkage", list(Linkage))
def test_discover_all_linkages(linkage):
    texts = ["rust memory safety", "rust borrow checker", "pasta sauce recipe", "bread flour baking"]
    tax = discover_taxonomy(texts, DiscoverConfig(k=2, linkage=linkage))
    assert 1 <= len(tax.categories) <= 2


def test_classify_with_threshold():
    texts = [
        "rust systems programming memory safety",
        "completely unrelated gibberish xyzzy plugh",
    ]
    tax = Taxonomy(
        name="test",
        version="1.0",
        categories=[Category(name="Rust", keywords=["rust", "systems", "memory", "safety"])],
    )
    results = classify_against_taxonomy(texts, tax, 0.0)
    assert results[0][0] == "Rust"
    assert results[0][1] == "Rust"
    assert results[0][2] > results[1][2]


def test_classify_high_threshold_returns_uncategorized():
    tax = Taxonomy(
        name="test",
        version="1.0",
        categories=[Category(name="Rust", keywords=["rust", "systems"])],
    )
    results = classify_against_taxonomy(["something vaguely related"], tax, 999.0)
    assert results[0][0] == "Uncategorized"
    assert results[0][2] == 0.0


def test_classify_empty_texts():
    tax = Taxonomy(
        name="test",
        version="1.0",
        categories=[Category(name="Cat", keywords=["word"])],
    )
    assert classify_against_taxonomy([], tax, 0.0) == []


def test_classify_multiple_categories():
    texts = [
        "rust memory safety borrow ownership",
        "javascript web html css browser dom",
    ]
    tax = Taxonomy(
        name="test",
        version="1.0",
        categories=[
            Category(name="Rust", keywords=["rust", "memory", "safety", "borrow"]),
            Category(name="Web", keywords=["javascript", "web", "html", "css"]),
        ],
    )
    results = classify_against_taxonomy(texts, tax, 0.0)
    assert results[0][0] == "Rust"
    assert results[1][0] == "Web"


def test_classify_nested_category_path():
    tax = Taxonomy(
        name="test",
        version="1.0",
        categories=[
            Category(
                name="Programming",
                keywords=["code"],
                children=[Category(name="Rust", keywords=["rust", "borrow", "ownership"])],
            )
        ],
    )
    results = classify_against_taxonomy(["rust borrow ownership"], tax, 0.0)
    assert results[0][0] == "Rust"
    assert results[0][1] == "Programming > Rust"


def test_discover_config_default():
    config = DiscoverConfig()
    assert config.k == 15
    assert config.sample_size == 500
    assert config.label_terms == 3
    assert config.keywords_per_cluster == 20
    assert config.linkage is Linkage.WARD
    assert config.seed == 42


def test_capitalize_helper():
    assert capitalize("hello") == "Hello"
    assert capitalize("") == ""
    assert capitalize("a") == "A"
    assert capitalize("ALREADY") == "ALREADY"