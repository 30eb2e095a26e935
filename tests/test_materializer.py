"""Tests for single-example project generation."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from fhevm_scaffold.catalog import Catalog
from fhevm_scaffold.config import DEFAULT_EXCLUDE_DIRS
from fhevm_scaffold.errors import ExtractionFailedError, NotFoundError, PreconditionFailedError
from fhevm_scaffold.materializer import Materializer, copy_template
from tests._fixtures.hub_builder import HubBuilder


def _materializer(hub_builder: HubBuilder, catalog: Catalog) -> Materializer:
    return Materializer(
        catalog,
        root=hub_builder.path(),
        template_dir=hub_builder.path() / "fhevm-hardhat-template",
        exclude_dirs=DEFAULT_EXCLUDE_DIRS,
    )


def test_materialize_success_path(hub_builder: HubBuilder, tmp_path: Path) -> None:
    catalog = hub_builder.build()
    destination = tmp_path / "out" / "ctr"

    result = _materializer(hub_builder, catalog).materialize("fhe-counter", destination)

    assert result.type_name == "FHECounter"
    assert (destination / "contracts" / "FHECounter.sol").is_file()
    assert (destination / "test" / "FHECounter.test.ts").is_file()
    manifest = json.loads((destination / "package.json").read_text(encoding="utf-8"))
    assert manifest["name"] == "fhevm-example-fhe-counter"
    assert manifest["description"] == "Encrypted counter"
    assert manifest["scripts"] == {"test": "hardhat test"}
    readme = (destination / "README.md").read_text(encoding="utf-8")
    assert "FHECounter" in readme
    assert readme.startswith("# FHE Counter\n")
    assert "Basic FHE Examples" in readme
    assert "contracts/FHECounter.sol" in readme
    assert "euint32, add" in readme


def test_contract_and_test_are_copied_verbatim(hub_builder: HubBuilder, tmp_path: Path) -> None:
    catalog = hub_builder.build()
    destination = tmp_path / "ctr"
    _materializer(hub_builder, catalog).materialize("fhe-counter", destination)

    source = hub_builder.path() / "contracts" / "basic" / "FHECounter.sol"
    copied = destination / "contracts" / "FHECounter.sol"
    assert copied.read_bytes() == source.read_bytes()


def test_deploy_script_references_type_name(hub_builder: HubBuilder, tmp_path: Path) -> None:
    catalog = hub_builder.build()
    destination = tmp_path / "auction"
    _materializer(hub_builder, catalog).materialize("blind-auction", destination)

    deploy = (destination / "scripts" / "deploy.js").read_text(encoding="utf-8")
    assert 'getContractFactory("BlindAuction")' in deploy
    assert "template deploy" not in deploy
    assert (destination / "contracts" / "BlindAuction.sol").is_file()


def test_placeholders_and_excluded_dirs_are_absent(hub_builder: HubBuilder, tmp_path: Path) -> None:
    catalog = hub_builder.build()
    destination = tmp_path / "ctr"
    _materializer(hub_builder, catalog).materialize("fhe-counter", destination)

    assert not (destination / "contracts" / "TemplateContract.sol").exists()
    assert not (destination / "test" / "TemplateContract.test.js").exists()
    assert not (destination / "node_modules").exists()
    assert not (destination / "artifacts").exists()
    assert (destination / "tasks" / "accounts.ts").is_file()
    assert (destination / "hardhat.config.ts").is_file()


def test_existing_destination_is_left_untouched(hub_builder: HubBuilder, tmp_path: Path) -> None:
    catalog = hub_builder.build()
    destination = tmp_path / "dup"
    destination.mkdir()
    (destination / "keep.txt").write_text("mine", encoding="utf-8")

    with pytest.raises(PreconditionFailedError, match="already exists"):
        _materializer(hub_builder, catalog).materialize("fhe-counter", destination)

    assert [p.name for p in destination.iterdir()] == ["keep.txt"]


def test_unknown_example_writes_nothing(hub_builder: HubBuilder, tmp_path: Path) -> None:
    catalog = hub_builder.build()
    destination = tmp_path / "x"

    with pytest.raises(NotFoundError):
        _materializer(hub_builder, catalog).materialize("not-a-real-example", destination)

    assert not destination.exists()


def test_missing_source_fails_before_writing(hub_builder: HubBuilder, tmp_path: Path) -> None:
    catalog = hub_builder.build()
    (hub_builder.path() / "test" / "basic" / "FHECounter.test.ts").unlink()
    destination = tmp_path / "ctr"

    with pytest.raises(PreconditionFailedError, match="Source file not found"):
        _materializer(hub_builder, catalog).materialize("fhe-counter", destination)

    assert not destination.exists()


def test_extraction_failure_leaves_partial_copy(hub_builder: HubBuilder, tmp_path: Path) -> None:
    catalog = hub_builder.build()
    hub_builder.write({"contracts/basic/FHECounter.sol": "// no declaration\n"})
    destination = tmp_path / "ctr"

    with pytest.raises(ExtractionFailedError):
        _materializer(hub_builder, catalog).materialize("fhe-counter", destination)

    assert (destination / "hardhat.config.ts").is_file()
    assert not (destination / "README.md").exists()


def test_manifest_written_when_template_has_none(hub_builder: HubBuilder, tmp_path: Path) -> None:
    catalog = hub_builder.build()
    (hub_builder.path() / "fhevm-hardhat-template" / "package.json").unlink()
    destination = tmp_path / "ctr"

    _materializer(hub_builder, catalog).materialize("fhe-counter", destination)

    manifest = json.loads((destination / "package.json").read_text(encoding="utf-8"))
    assert list(manifest)[0] == "name"
    assert manifest["name"] == "fhevm-example-fhe-counter"
    assert manifest["license"] == "BSD-3-Clause-Clear"


def test_copy_template_skips_excluded_names(tmp_path: Path) -> None:
    source = tmp_path / "src"
    (source / "cache").mkdir(parents=True)
    (source / "cache" / "x").write_text("x", encoding="utf-8")
    (source / "nested" / "cache").mkdir(parents=True)
    (source / "nested" / "keep.txt").write_text("k", encoding="utf-8")
    destination = tmp_path / "dest"

    copy_template(source, destination, ["cache"])

    assert not (destination / "cache").exists()
    assert not (destination / "nested" / "cache").exists()
    assert (destination / "nested" / "keep.txt").read_text(encoding="utf-8") == "k"


def test_non_utf8_contract_is_copied_byte_for_byte(hub_builder: HubBuilder, tmp_path: Path) -> None:
    catalog = hub_builder.build()
    raw = b"// \xa9 2024 Author\ncontract FHECounter is SepoliaConfig {\n}\n"
    (hub_builder.path() / "contracts" / "basic" / "FHECounter.sol").write_bytes(raw)
    destination = tmp_path / "ctr"

    result = _materializer(hub_builder, catalog).materialize("fhe-counter", destination)

    assert result.type_name == "FHECounter"
    assert (destination / "contracts" / "FHECounter.sol").read_bytes() == raw
