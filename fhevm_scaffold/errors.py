"""Exception hierarchy for scaffolding operations."""

from __future__ import annotations

from typing import Iterable


class ScaffoldError(RuntimeError):
    """Base class for every failure surfaced by the scaffolding tool."""


class NotFoundError(ScaffoldError):
    """Raised when an example or category id is not in the catalog."""

    def __init__(self, kind: str, identifier: str, available: Iterable[str]) -> None:
        self.kind = kind
        self.identifier = identifier
        self.available = list(available)
        listing = "\n".join(f"  - {name}" for name in self.available) or "  (none)"
        super().__init__(f"Unknown {kind}: {identifier}\n\nAvailable {kind}s:\n{listing}")


class PreconditionFailedError(ScaffoldError):
    """Raised before any write when the destination or sources are unusable."""


class ExtractionFailedError(ScaffoldError):
    """Raised when no type declaration can be recovered from a contract."""


class CatalogError(ScaffoldError):
    """Raised when the catalog data file is malformed."""


class ConfigError(ScaffoldError):
    """Raised when the configuration file cannot be parsed."""


__all__ = [
    "CatalogError",
    "ConfigError",
    "ExtractionFailedError",
    "NotFoundError",
    "PreconditionFailedError",
    "ScaffoldError",
]
