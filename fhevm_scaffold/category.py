"""Build a multi-example collection directory for one category."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Set

from .catalog import Catalog
from .errors import PreconditionFailedError
from .logging import get_logger, log_step
from .models import CategoryDescriptor, CategoryResult
from .rendering import TemplateRenderer


@dataclass(frozen=True)
class _Member:
    """Display view of one category entry, known to the catalog or not."""

    id: str
    title: str
    description: str


class CategoryBuilder:
    """Creates placeholder example directories plus aggregate docs for a category.

    Members are not materialized into full projects; each gets a short README
    and the aggregate ``package.json`` drives install and test across them.
    """

    def __init__(
        self,
        catalog: Catalog,
        *,
        project_prefix: str = "fhevm-examples",
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.catalog = catalog
        self.project_prefix = project_prefix
        self.renderer = renderer or TemplateRenderer()
        self.logger = get_logger("category")

    def project_name(self, category_id: str) -> str:
        return f"{self.project_prefix}-{category_id}"

    def default_destination(self, output_dir: Path, category_id: str) -> Path:
        return output_dir / f"fhevm-{category_id}-examples"

    def build(self, category_id: str, destination: Path) -> CategoryResult:
        category = self.catalog.require_category(category_id)
        if destination.exists():
            raise PreconditionFailedError(f"Output directory already exists: {destination}")

        members = self._members(category)
        self.logger.info("Creating category project %s at %s", category.id, destination)

        log_step(self.logger, 1, "Creating directory structure")
        examples_dir = destination / "examples"
        examples_dir.mkdir(parents=True)

        log_step(self.logger, 2, "Creating package.json")
        manifest = self._manifest(category)
        (destination / "package.json").write_text(
            json.dumps(manifest, indent=2) + "\n", encoding="utf-8"
        )

        log_step(self.logger, 3, "Generating README.md")
        context = {"category": category, "members": members}
        (destination / "README.md").write_text(
            self.renderer.render_markdown("category_readme.md.j2", **context), encoding="utf-8"
        )

        log_step(self.logger, 4, "Generating CATEGORY_SUMMARY.md")
        (destination / "CATEGORY_SUMMARY.md").write_text(
            self.renderer.render_markdown("category_summary.md.j2", **context), encoding="utf-8"
        )

        log_step(self.logger, 5, "Creating example placeholders")
        for member in members:
            member_dir = examples_dir / member.id
            member_dir.mkdir()
            (member_dir / "README.md").write_text(
                self.renderer.render_markdown(
                    "placeholder_readme.md.j2", category=category, member=member
                ),
                encoding="utf-8",
            )
        self.logger.debug("Created %d example placeholders", len(members))

        log_step(self.logger, 6, "Creating .gitignore")
        (destination / ".gitignore").write_text(
            self.renderer.render("gitignore.j2"), encoding="utf-8"
        )

        self.logger.info("Category %s generated", category.id)
        return CategoryResult(path=destination, examples=[member.id for member in members])

    def _members(self, category: CategoryDescriptor) -> List[_Member]:
        members: List[_Member] = []
        seen: Set[str] = set()
        for example_id in category.examples:
            if example_id in seen:
                self.logger.warning(
                    "Category %s lists %s more than once; keeping the first", category.id, example_id
                )
                continue
            seen.add(example_id)
            example = self.catalog.lookup_example(example_id)
            if example is None:
                self.logger.warning(
                    "Category %s lists %s which is not in the catalog", category.id, example_id
                )
                members.append(_Member(example_id, example_id, ""))
            else:
                members.append(_Member(example.id, example.title, example.description))
        return members

    def _manifest(self, category: CategoryDescriptor) -> Dict[str, object]:
        return {
            "name": self.project_name(category.id),
            "version": "1.0.0",
            "description": category.description,
            "scripts": {
                "install:all": (
                    'npm install && cd examples && for dir in */; do (cd "$dir" && npm install); done'
                ),
                "test:all": (
                    'cd examples && for dir in */; do echo "Testing $dir..." && (cd "$dir" && npm test); done'
                ),
            },
            "keywords": ["fhevm", "privacy", "encryption", category.id],
            "author": "Zama",
            "license": "BSD-3-Clause-Clear",
        }


__all__ = ["CategoryBuilder"]
