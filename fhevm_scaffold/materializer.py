"""Turn one catalog example into a standalone Hardhat project."""

from __future__ import annotations

import json
import shutil
from pathlib import Path
from typing import Any, Dict, Iterable

from .catalog import Catalog
from .errors import PreconditionFailedError, ScaffoldError
from .extractor import read_type_name
from .logging import get_logger, log_step
from .models import ExampleDescriptor, MaterializeResult
from .rendering import TemplateRenderer

PLACEHOLDER_FILES: tuple[str, ...] = (
    "contracts/TemplateContract.sol",
    "test/TemplateContract.test.js",
    "test/TemplateContract.ts",
)


def copy_template(source: Path, destination: Path, exclude: Iterable[str]) -> None:
    """Recursively copy ``source`` into ``destination`` skipping excluded directory names."""
    excluded = set(exclude)
    destination.mkdir(parents=True, exist_ok=True)
    for entry in sorted(source.iterdir()):
        target = destination / entry.name
        if entry.is_dir():
            if entry.name in excluded:
                continue
            copy_template(entry, target, excluded)
        else:
            shutil.copyfile(entry, target)


class Materializer:
    """Copies the hub template and overlays one example's contract and test."""

    def __init__(
        self,
        catalog: Catalog,
        *,
        root: Path,
        template_dir: Path,
        exclude_dirs: Iterable[str],
        project_prefix: str = "fhevm-example",
        contract_extension: str = "sol",
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.catalog = catalog
        self.root = root
        self.template_dir = template_dir
        self.exclude_dirs = tuple(exclude_dirs)
        self.project_prefix = project_prefix
        self.contract_extension = contract_extension
        self.renderer = renderer or TemplateRenderer()
        self.logger = get_logger("materializer")

    def project_name(self, example_id: str) -> str:
        return f"{self.project_prefix}-{example_id}"

    def default_destination(self, output_dir: Path, example_id: str) -> Path:
        return output_dir / self.project_name(example_id)

    def materialize(self, example_id: str, destination: Path) -> MaterializeResult:
        """Generate the project for ``example_id`` at ``destination``.

        Every precondition is checked before the first write. A contract whose
        type name cannot be extracted fails after the template copy and leaves
        the partially built destination in place.
        """
        example = self.catalog.require_example(example_id)
        contract_source = self.root / example.contract_path
        test_source = self.root / example.test_path
        self._check_preconditions(destination, contract_source, test_source)

        self.logger.info("Creating example project %s at %s", example.id, destination)

        log_step(self.logger, 1, "Copying template")
        copy_template(self.template_dir, destination, self.exclude_dirs)

        log_step(self.logger, 2, "Extracting contract name")
        type_name = read_type_name(contract_source)
        self.logger.debug("Contract %s declares %s", contract_source, type_name)

        log_step(self.logger, 3, "Copying contract and test")
        self._remove_placeholders(destination)
        contract_file = Path("contracts") / f"{type_name}.{self.contract_extension}"
        test_file = Path("test") / test_source.name
        for source, relative in ((contract_source, contract_file), (test_source, test_file)):
            target = destination / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, target)

        log_step(self.logger, 4, "Writing package.json and deploy script")
        self._write_manifest(destination, example)
        deploy_script = destination / "scripts" / "deploy.js"
        deploy_script.parent.mkdir(parents=True, exist_ok=True)
        deploy_script.write_text(
            self.renderer.render("deploy.js.j2", type_name=type_name), encoding="utf-8"
        )

        log_step(self.logger, 5, "Generating README.md")
        category = self.catalog.lookup_category(example.category)
        readme = self.renderer.render_markdown(
            "example_readme.md.j2",
            example=example,
            category_title=category.title if category else example.category,
            type_name=type_name,
            project_name=destination.name,
            contract_file=contract_file.as_posix(),
            test_file=test_file.as_posix(),
        )
        (destination / "README.md").write_text(readme, encoding="utf-8")

        self.logger.info("Example %s generated", example.id)
        return MaterializeResult(
            path=destination,
            type_name=type_name,
            contract_file=destination / contract_file,
            test_file=destination / test_file,
        )

    def _check_preconditions(self, destination: Path, *sources: Path) -> None:
        if destination.exists():
            raise PreconditionFailedError(f"Output directory already exists: {destination}")
        if not self.template_dir.is_dir():
            raise PreconditionFailedError(f"Template directory not found: {self.template_dir}")
        for source in sources:
            if not source.is_file():
                raise PreconditionFailedError(f"Source file not found: {source}")

    def _remove_placeholders(self, destination: Path) -> None:
        for relative in PLACEHOLDER_FILES:
            placeholder = destination / relative
            if placeholder.exists():
                self.logger.debug("Removing template placeholder %s", relative)
                placeholder.unlink()

    def _write_manifest(self, destination: Path, example: ExampleDescriptor) -> None:
        manifest_path = destination / "package.json"
        manifest: Dict[str, Any] = {"name": "", "version": "1.0.0", "description": ""}
        if manifest_path.exists():
            try:
                manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as exc:
                raise ScaffoldError(f"Template package.json is not valid JSON: {exc}") from exc
        else:
            manifest.update(
                {
                    "license": "BSD-3-Clause-Clear",
                    "scripts": {"compile": "hardhat compile", "test": "hardhat test"},
                }
            )
        manifest["name"] = self.project_name(example.id)
        manifest["description"] = example.description
        manifest_path.write_text(json.dumps(manifest, indent=2) + "\n", encoding="utf-8")


__all__ = ["Materializer", "PLACEHOLDER_FILES", "copy_template"]
