"""Configuration loading for fhevm-scaffold (.scaffold.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError

CONFIG_FILENAME = ".scaffold.yml"

DEFAULT_EXCLUDE_DIRS: tuple[str, ...] = (
    "node_modules",
    "artifacts",
    "cache",
    "coverage",
    "types",
    "typechain-types",
    "dist",
    "build",
    ".git",
    ".hardhat-node",
    "fhevmTemp",
)


@dataclass
class ScaffoldConfig:
    """Represents the settings defined in .scaffold.yml."""

    root: Path
    catalog: Optional[Path] = None
    template_dir: Path = Path("fhevm-hardhat-template")
    output_dir: Path = Path("output")
    docs_dir: Path = Path("docs")
    example_prefix: str = "fhevm-example"
    category_prefix: str = "fhevm-examples"
    contract_extension: str = "sol"
    exclude_dirs: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE_DIRS))
    templates_dir: Optional[Path] = None

    def __post_init__(self) -> None:
        self.template_dir = self._anchor(self.template_dir)
        self.output_dir = self._anchor(self.output_dir)
        self.docs_dir = self._anchor(self.docs_dir)
        if self.catalog is not None:
            self.catalog = self._anchor(self.catalog)
        if self.templates_dir is not None:
            self.templates_dir = self._anchor(self.templates_dir)

    def _anchor(self, path: Path) -> Path:
        return path if path.is_absolute() else self.root / path


def load_config(config_path: Path) -> ScaffoldConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ScaffoldConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    kwargs: Dict[str, Any] = {}
    for key in ("catalog", "template_dir", "output_dir", "docs_dir", "templates_dir"):
        value = _as_str(data.get(key))
        if value:
            kwargs[key] = Path(value).expanduser()
    for key in ("example_prefix", "category_prefix"):
        value = _as_str(data.get(key))
        if value:
            kwargs[key] = value.strip("-")
    extension = _as_str(data.get("contract_extension"))
    if extension:
        kwargs["contract_extension"] = extension.lstrip(".")

    extra_excludes = _as_str_list(data.get("exclude_dirs"))
    if extra_excludes:
        merged = list(DEFAULT_EXCLUDE_DIRS)
        merged.extend(name for name in extra_excludes if name not in merged)
        kwargs["exclude_dirs"] = merged

    return ScaffoldConfig(root=root, **kwargs)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["CONFIG_FILENAME", "DEFAULT_EXCLUDE_DIRS", "ScaffoldConfig", "load_config"]
