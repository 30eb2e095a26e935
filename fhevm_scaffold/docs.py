"""Markdown documentation pages and the cross-linked SUMMARY index."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .catalog import Catalog
from .logging import get_logger
from .models import DocMetadata
from .rendering import TemplateRenderer


@dataclass
class Chapter:
    """One SUMMARY heading and the pages listed beneath it."""

    key: str
    title: str
    docs: List[DocMetadata] = field(default_factory=list)


class DocumentationGenerator:
    """Writes ``<docs_root>/examples/<id>.md`` pages and ``<docs_root>/SUMMARY.md``.

    Output is overwritten on every run; missing directories are created.
    """

    def __init__(
        self,
        catalog: Catalog,
        docs_root: Path,
        *,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.catalog = catalog
        self.docs_root = docs_root
        self.renderer = renderer or TemplateRenderer()
        self.logger = get_logger("docs")

    @property
    def examples_dir(self) -> Path:
        return self.docs_root / "examples"

    def generate_one(self, example_id: str) -> Optional[Path]:
        """Render one page; returns None with a warning when no metadata exists."""
        doc = self.catalog.lookup_doc(example_id)
        if doc is None:
            self.logger.warning("No documentation metadata for %s; skipping", example_id)
            return None
        self.examples_dir.mkdir(parents=True, exist_ok=True)
        page = self.examples_dir / f"{doc.id}.md"
        content = self.renderer.render_markdown(
            "doc_page.md.j2", doc=doc, chapter_title=self.chapter_title(doc.chapter)
        )
        page.write_text(content, encoding="utf-8")
        self.logger.info("Documentation generated for %s", doc.id)
        return page

    def generate_all(self) -> List[Path]:
        written: List[Path] = []
        for example_id in self.catalog.list_doc_ids():
            page = self.generate_one(example_id)
            if page is not None:
                written.append(page)
        written.append(self.generate_summary())
        return written

    def generate_summary(self) -> Path:
        self.docs_root.mkdir(parents=True, exist_ok=True)
        summary = self.docs_root / "SUMMARY.md"
        content = self.renderer.render_markdown("summary.md.j2", chapters=self.chapters())
        summary.write_text(content, encoding="utf-8")
        self.logger.info("Summary written to %s", summary)
        return summary

    def chapters(self) -> List[Chapter]:
        """Group metadata by chapter; headings in first-occurrence order."""
        grouped: Dict[str, Chapter] = {}
        for doc in self.catalog.docs.values():
            chapter = grouped.get(doc.chapter)
            if chapter is None:
                chapter = Chapter(doc.chapter, self.chapter_title(doc.chapter))
                grouped[doc.chapter] = chapter
            chapter.docs.append(doc)
        return list(grouped.values())

    def chapter_title(self, chapter: str) -> str:
        category = self.catalog.lookup_category(chapter)
        if category is not None:
            return category.title
        return chapter.replace("-", " ").replace("_", " ").title()


__all__ = ["Chapter", "DocumentationGenerator"]
