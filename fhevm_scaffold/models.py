"""Core data models shared across scaffolding components."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple


@dataclass(frozen=True)
class ExampleDescriptor:
    """Catalog entry pointing to one teaching contract/test pair."""

    id: str
    title: str
    description: str
    category: str
    contract_path: str
    test_path: str
    tags: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CategoryDescriptor:
    """Named, ordered group of examples."""

    id: str
    title: str
    description: str
    examples: Tuple[str, ...] = ()


@dataclass(frozen=True)
class DocMetadata:
    """Documentation payload for one example page."""

    id: str
    chapter: str
    title: str
    description: str
    key_features: Tuple[str, ...] = ()
    use_cases: Tuple[str, ...] = ()


@dataclass
class MaterializeResult:
    """Outcome of a successful single-example generation."""

    path: Path
    type_name: str
    contract_file: Path
    test_file: Path


@dataclass
class CategoryResult:
    """Outcome of a successful category collection build."""

    path: Path
    examples: List[str] = field(default_factory=list)
