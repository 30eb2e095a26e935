"""Tests for template rendering and markdown normalisation."""

from __future__ import annotations

from pathlib import Path

from fhevm_scaffold.rendering import TemplateRenderer, normalise_markdown


def test_user_templates_shadow_bundled_ones(tmp_path: Path) -> None:
    (tmp_path / "deploy.js.j2").write_text("// custom {{ type_name }}\n", encoding="utf-8")
    renderer = TemplateRenderer(tmp_path)

    assert renderer.render("deploy.js.j2", type_name="Foo") == "// custom Foo\n"
    assert "node_modules/" in renderer.render("gitignore.j2")


def test_bundled_deploy_template() -> None:
    script = TemplateRenderer().render("deploy.js.j2", type_name="FHECounter")
    assert 'getContractFactory("FHECounter")' in script
    assert "FHECounter deployed to:" in script


def test_normalise_markdown_collapses_blank_runs() -> None:
    markdown = "\n\n# Title\r\nText  \n\n\n\n## Section\nBody\n\n"
    assert normalise_markdown(markdown) == "# Title\n\nText\n\n## Section\n\nBody\n"


def test_normalise_markdown_preserves_code_fences() -> None:
    markdown = "# Title\n\n```bash\n# comment\n\n\nnpm test\n```\n"
    assert normalise_markdown(markdown) == markdown
