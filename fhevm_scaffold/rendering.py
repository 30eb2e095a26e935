"""Jinja environment for the bundled markdown and script templates."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List

from jinja2 import Environment, FileSystemLoader, StrictUndefined

DEFAULT_TEMPLATES_DIR = Path(__file__).with_name("templates")


class TemplateRenderer:
    """Renders named templates, letting a user directory shadow the bundled ones."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir
        self._env = self._create_env(templates_dir)

    def render(self, name: str, **context: Any) -> str:
        return self._env.get_template(name).render(**context).rstrip() + "\n"

    def render_markdown(self, name: str, **context: Any) -> str:
        return normalise_markdown(self._env.get_template(name).render(**context))

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories: List[str] = []
        if templates_dir:
            directories.append(str(templates_dir))
        default_dir = str(DEFAULT_TEMPLATES_DIR)
        if default_dir not in directories:
            directories.append(default_dir)
        return Environment(
            loader=FileSystemLoader(directories),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )


def normalise_markdown(markdown: str) -> str:
    """Collapse blank-line runs and pad headings, leaving fenced code untouched."""
    lines = markdown.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    output: List[str] = []
    in_fence = False

    for raw in lines:
        line = raw.rstrip()
        if line.startswith("```"):
            in_fence = not in_fence
            output.append(line)
            continue
        if in_fence:
            output.append(line)
            continue
        if not line:
            if output and output[-1] != "":
                output.append("")
            continue
        if output and output[-1] != "" and (line.startswith("#") or output[-1].startswith("#")):
            output.append("")
        output.append(line)

    while output and output[-1] == "":
        output.pop()
    return "\n".join(output) + "\n"


__all__ = ["DEFAULT_TEMPLATES_DIR", "TemplateRenderer", "normalise_markdown"]
