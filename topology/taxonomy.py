"""Taxonomy trees of keyword-labelled categories, with JSON loading."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


class TaxonomyError(ValueError):
    """Raised when a taxonomy cannot be read or parsed."""


def _require(data: Mapping[str, Any], key: str, kind: type, what: str) -> Any:
    if key not in data:
        raise TaxonomyError(f"missing field `{key}` in {what}")
    value = data[key]
    if not isinstance(value, kind):
        raise TaxonomyError(f"field `{key}` in {what} must be {kind.__name__}")
    return value


def _string_list(values: list, key: str, what: str) -> list[str]:
    if not all(isinstance(v, str) for v in values):
        raise TaxonomyError(f"field `{key}` in {what} must hold strings")
    return list(values)


@dataclass
class Category:
    """A named category with keywords and optional sub-categories."""

    name: str
    keywords: list[str]
    children: list["Category"] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible representation."""
        return {
            "name": self.name,
            "keywords": list(self.keywords),
            "children": [child.to_dict() for child in self.children],
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Category":
        """Build a category; ``children`` is optional."""
        if not isinstance(data, Mapping):
            raise TaxonomyError("category must be an object")
        name = _require(data, "name", str, "category")
        keywords = _string_list(_require(data, "keywords", list, "category"), "keywords", "category")
        children_raw = data.get("children", [])
        if not isinstance(children_raw, list):
            raise TaxonomyError("field `children` in category must be list")
        return cls(name, keywords, [cls.from_dict(child) for child in children_raw])


@dataclass
class Taxonomy:
    """A full taxonomy tree."""

    name: str
    version: str
    categories: list[Category]

    def flatten(self) -> list[tuple[str, list[str]]]:
        """Depth-first list of ``(path, keywords)``; paths join names with ' > '."""
        result: list[tuple[str, list[str]]] = []

        def walk(cat: Category, prefix: str) -> None:
            path = f"{prefix} > {cat.name}" if prefix else cat.name
            result.append((path, list(cat.keywords)))
            for child in cat.children:
                walk(child, path)

        for cat in self.categories:
            walk(cat, "")
        return result

    def category_names(self) -> list[str]:
        """Names of the top-level categories."""
        return [cat.name for cat in self.categories]

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible representation."""
        return {
            "name": self.name,
            "version": self.version,
            "categories": [cat.to_dict() for cat in self.categories],
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Taxonomy":
        """Build a taxonomy, raising TaxonomyError on missing or mistyped fields."""
        if not isinstance(data, Mapping):
            raise TaxonomyError("taxonomy must be an object")
        name = _require(data, "name", str, "taxonomy")
        version = _require(data, "version", str, "taxonomy")
        categories = _require(data, "categories", list, "taxonomy")
        return cls(name, version, [Category.from_dict(c) for c in categories])

    def to_json(self) -> str:
        """Serialize to a JSON string."""
        return json.dumps(self.to_dict())


def parse_taxonomy(text: str) -> Taxonomy:
    """Parse a taxonomy from JSON text."""
    try:
        data = json.loads(text)
        return Taxonomy.from_dict(data)
    except (json.JSONDecodeError, TaxonomyError) as exc:
        raise TaxonomyError(f"Failed to parse taxonomy: {exc}") from exc


def load_taxonomy(path: str | Path) -> Taxonomy:
    """Read and parse a taxonomy JSON file."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise TaxonomyError(f"Failed to read '{path}': {exc}") from exc
    return parse_taxonomy(text)