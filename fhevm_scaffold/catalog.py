"""Read-only catalog of examples, categories, and documentation metadata."""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import yaml

from .errors import CatalogError, NotFoundError
from .models import CategoryDescriptor, DocMetadata, ExampleDescriptor

DEFAULT_CATALOG_PATH = Path(__file__).with_name("data") / "catalog.yml"


class Catalog:
    """Immutable lookup tables built once and shared by every generator.

    Example descriptors and documentation metadata are keyed by the same ids
    but kept in separate tables; an id may appear in one and not the other.
    Iteration order is declaration order.
    """

    def __init__(
        self,
        examples: Iterable[ExampleDescriptor] = (),
        categories: Iterable[CategoryDescriptor] = (),
        docs: Iterable[DocMetadata] = (),
    ) -> None:
        self._examples = MappingProxyType(_index(examples, "example"))
        self._categories = MappingProxyType(_index(categories, "category"))
        self._docs = MappingProxyType(_index(docs, "doc"))

    @property
    def examples(self) -> Mapping[str, ExampleDescriptor]:
        return self._examples

    @property
    def categories(self) -> Mapping[str, CategoryDescriptor]:
        return self._categories

    @property
    def docs(self) -> Mapping[str, DocMetadata]:
        return self._docs

    def lookup_example(self, example_id: str) -> Optional[ExampleDescriptor]:
        return self._examples.get(example_id)

    def lookup_category(self, category_id: str) -> Optional[CategoryDescriptor]:
        return self._categories.get(category_id)

    def lookup_doc(self, example_id: str) -> Optional[DocMetadata]:
        return self._docs.get(example_id)

    def require_example(self, example_id: str) -> ExampleDescriptor:
        example = self.lookup_example(example_id)
        if example is None:
            raise NotFoundError("example", example_id, self.list_example_ids())
        return example

    def require_category(self, category_id: str) -> CategoryDescriptor:
        category = self.lookup_category(category_id)
        if category is None:
            raise NotFoundError("category", category_id, self.list_category_ids())
        return category

    def list_example_ids(self) -> List[str]:
        return list(self._examples)

    def list_category_ids(self) -> List[str]:
        return list(self._categories)

    def list_doc_ids(self) -> List[str]:
        return list(self._docs)

    def examples_in(self, category_id: str) -> List[ExampleDescriptor]:
        """Return the known descriptors of a category in its declared order."""
        category = self.require_category(category_id)
        return [self._examples[ex] for ex in category.examples if ex in self._examples]

    def validate(self) -> List[str]:
        """Return human-readable cross-reference problems; empty when consistent."""
        problems: List[str] = []
        for example in self._examples.values():
            if example.category not in self._categories:
                problems.append(
                    f"example '{example.id}' references unknown category '{example.category}'"
                )
        for category in self._categories.values():
            seen: set[str] = set()
            for member in category.examples:
                if member in seen:
                    problems.append(f"category '{category.id}' lists '{member}' more than once")
                    continue
                seen.add(member)
                if member not in self._examples:
                    problems.append(
                        f"category '{category.id}' lists unknown example '{member}'"
                    )
        return problems


def load_catalog(path: Path | None = None) -> Catalog:
    """Build a catalog from a YAML data file (the bundled one by default)."""
    catalog_path = path or DEFAULT_CATALOG_PATH
    try:
        text = catalog_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise CatalogError(f"Catalog file not found: {catalog_path}") from exc
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise CatalogError(f"Failed to parse {catalog_path.name}: {exc}") from exc
    if not isinstance(data, dict):
        raise CatalogError(f"{catalog_path.name} must contain a mapping at the root")
    return catalog_from_mapping(data)


def catalog_from_mapping(data: Mapping[str, Any]) -> Catalog:
    """Build a catalog from already-parsed data."""
    examples = [
        _parse_example(key, value) for key, value in _section(data, "examples").items()
    ]
    categories = [
        _parse_category(key, value) for key, value in _section(data, "categories").items()
    ]
    docs = [_parse_doc(key, value) for key, value in _section(data, "docs").items()]
    return Catalog(examples, categories, docs)


def _index(items: Iterable[Any], kind: str) -> Dict[str, Any]:
    indexed: Dict[str, Any] = {}
    for item in items:
        if item.id in indexed:
            raise CatalogError(f"Duplicate {kind} id: {item.id}")
        indexed[item.id] = item
    return indexed


def _section(data: Mapping[str, Any], name: str) -> Dict[str, Any]:
    value = data.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise CatalogError(f"'{name}' must be a mapping of id to entry")
    for key, entry in value.items():
        if not isinstance(entry, dict):
            raise CatalogError(f"{name}.{key} must be a mapping")
    return value


def _required(entry: Mapping[str, Any], field_name: str, where: str) -> str:
    value = entry.get(field_name)
    if not isinstance(value, str) or not value.strip():
        raise CatalogError(f"{where} is missing required field '{field_name}'")
    return value.strip()


def _str_tuple(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, list):
        return tuple(str(item) for item in value)
    raise CatalogError(f"Expected a list of strings, got {type(value).__name__}")


def _parse_example(example_id: str, entry: Mapping[str, Any]) -> ExampleDescriptor:
    where = f"examples.{example_id}"
    title = entry.get("title") or str(example_id).replace("-", " ").title()
    return ExampleDescriptor(
        id=str(example_id),
        title=str(title),
        description=_required(entry, "description", where),
        category=_required(entry, "category", where),
        contract_path=_required(entry, "contract", where),
        test_path=_required(entry, "test", where),
        tags=_str_tuple(entry.get("tags")),
    )


def _parse_category(category_id: str, entry: Mapping[str, Any]) -> CategoryDescriptor:
    where = f"categories.{category_id}"
    return CategoryDescriptor(
        id=str(category_id),
        title=_required(entry, "title", where),
        description=_required(entry, "description", where),
        examples=_str_tuple(entry.get("examples")),
    )


def _parse_doc(example_id: str, entry: Mapping[str, Any]) -> DocMetadata:
    where = f"docs.{example_id}"
    return DocMetadata(
        id=str(example_id),
        chapter=_required(entry, "chapter", where),
        title=_required(entry, "title", where),
        description=_required(entry, "description", where),
        key_features=_str_tuple(entry.get("key_features")),
        use_cases=_str_tuple(entry.get("use_cases")),
    )


__all__ = ["Catalog", "DEFAULT_CATALOG_PATH", "catalog_from_mapping", "load_catalog"]
