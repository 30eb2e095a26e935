"""Scaffolding and documentation generator for the FHEVM example hub."""

from .catalog import Catalog, load_catalog
from .category import CategoryBuilder
from .docs import DocumentationGenerator
from .extractor import extract_type_name
from .materializer import Materializer

__all__ = [
    "Catalog",
    "CategoryBuilder",
    "DocumentationGenerator",
    "Materializer",
    "extract_type_name",
    "load_catalog",
]
