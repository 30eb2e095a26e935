"""CLI entrypoints for fhevm-scaffold commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

from .catalog import Catalog, load_catalog
from .category import CategoryBuilder
from .config import ScaffoldConfig, load_config
from .docs import DocumentationGenerator
from .errors import ScaffoldError
from .logging import configure_logging, get_logger
from .materializer import Materializer
from .rendering import TemplateRenderer

_PROG = "fhevm-scaffold"


def _add_common_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    def _default(value: object) -> object:
        return argparse.SUPPRESS if suppress_default else value

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=_default(False),
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--root",
        default=_default("."),
        help="Path to the example hub root (defaults to current directory).",
    )
    parser.add_argument(
        "--config",
        default=_default(None),
        help="Path to a .scaffold.yml file (defaults to <root>/.scaffold.yml).",
    )
    parser.add_argument(
        "--log-file",
        default=_default(None),
        help="Also write detailed logs to this file.",
    )


def _add_help_option(parser: argparse.ArgumentParser) -> None:
    # Subcommand help needs the loaded catalog, so it is handled after parsing.
    parser.add_argument(
        "-h",
        "--help",
        action="store_true",
        default=False,
        help="Show usage and the available catalog entries.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=_PROG,
        description="Generate standalone FHEVM example projects, category collections, and docs.",
    )
    _add_common_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    example_parser = subparsers.add_parser(
        "example",
        add_help=False,
        help="Generate a standalone project for one example.",
        usage=f"{_PROG} example <example-id> [destination]",
    )
    _add_common_options(example_parser, suppress_default=True)
    _add_help_option(example_parser)
    example_parser.add_argument("example_id", nargs="?", help="Catalog id of the example.")
    example_parser.add_argument(
        "destination",
        nargs="?",
        help="Output directory (defaults to ./output/fhevm-example-<example-id>).",
    )

    category_parser = subparsers.add_parser(
        "category",
        add_help=False,
        help="Generate a collection project for one category.",
        usage=f"{_PROG} category <category-id> [destination]",
    )
    _add_common_options(category_parser, suppress_default=True)
    _add_help_option(category_parser)
    category_parser.add_argument("category_id", nargs="?", help="Catalog id of the category.")
    category_parser.add_argument(
        "destination",
        nargs="?",
        help="Output directory (defaults to ./output/fhevm-<category-id>-examples).",
    )

    docs_parser = subparsers.add_parser(
        "docs",
        add_help=False,
        help="Generate markdown documentation pages.",
        usage=f"{_PROG} docs <example-id | --all>",
    )
    _add_common_options(docs_parser, suppress_default=True)
    _add_help_option(docs_parser)
    docs_parser.add_argument("example_id", nargs="?", help="Example id to document.")
    docs_parser.add_argument(
        "--all",
        dest="all_docs",
        action="store_true",
        help="Generate every documentation page and SUMMARY.md.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for fhevm-scaffold commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file).expanduser() if args.log_file else None
    configure_logging(verbose=bool(args.verbose), log_file=log_file)
    logger = get_logger("cli")

    try:
        config = _load_settings(args)
        catalog = load_catalog(config.catalog)
    except ScaffoldError as exc:
        parser.exit(1, f"Error: {exc}\n")
    for problem in catalog.validate():
        logger.warning("Catalog inconsistency: %s", problem)

    renderer = TemplateRenderer(config.templates_dir)

    if args.command == "example":
        _run_example(parser, args, config, catalog, renderer)
    elif args.command == "category":
        _run_category(parser, args, config, catalog, renderer)
    elif args.command == "docs":
        _run_docs(parser, args, config, catalog, renderer)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def generate_example(argv: list[str] | None = None) -> None:
    """Entry point for the ``generate-example`` console script."""
    main(["example", *(sys.argv[1:] if argv is None else argv)])


def generate_category(argv: list[str] | None = None) -> None:
    """Entry point for the ``generate-category`` console script."""
    main(["category", *(sys.argv[1:] if argv is None else argv)])


def generate_docs(argv: list[str] | None = None) -> None:
    """Entry point for the ``generate-docs`` console script."""
    main(["docs", *(sys.argv[1:] if argv is None else argv)])


def _load_settings(args: argparse.Namespace) -> ScaffoldConfig:
    root = Path(args.root).expanduser().resolve()
    config_path = Path(args.config) if args.config else root
    return load_config(config_path)


def _run_example(
    parser: argparse.ArgumentParser,
    args: argparse.Namespace,
    config: ScaffoldConfig,
    catalog: Catalog,
    renderer: TemplateRenderer,
) -> None:
    if args.help or not args.example_id:
        print(f"FHEVM Example Generator\n\nUsage: {_PROG} example <example-id> [destination]\n")
        print(format_example_listing(catalog))
        return

    materializer = Materializer(
        catalog,
        root=config.root,
        template_dir=config.template_dir,
        exclude_dirs=config.exclude_dirs,
        project_prefix=config.example_prefix,
        contract_extension=config.contract_extension,
        renderer=renderer,
    )
    destination = (
        Path(args.destination)
        if args.destination
        else materializer.default_destination(config.output_dir, args.example_id)
    )
    try:
        result = materializer.materialize(args.example_id, destination.expanduser().resolve())
    except ScaffoldError as exc:
        parser.exit(1, f"Error: {exc}\n")
    except OSError as exc:
        parser.exit(1, f"Example generation failed: {exc}\nRun with --verbose for more details.\n")

    rel_path = _relativize(result.path)
    print(f"Example project created at {rel_path}")
    print("\nNext steps:")
    print(f"  cd {rel_path}")
    print("  npm install")
    print("  npm run compile")
    print("  npm run test")


def _run_category(
    parser: argparse.ArgumentParser,
    args: argparse.Namespace,
    config: ScaffoldConfig,
    catalog: Catalog,
    renderer: TemplateRenderer,
) -> None:
    if args.help or not args.category_id:
        print(f"FHEVM Category Project Generator\n\nUsage: {_PROG} category <category-id> [destination]\n")
        print(format_category_listing(catalog))
        return

    builder = CategoryBuilder(catalog, project_prefix=config.category_prefix, renderer=renderer)
    destination = (
        Path(args.destination)
        if args.destination
        else builder.default_destination(config.output_dir, args.category_id)
    )
    try:
        result = builder.build(args.category_id, destination.expanduser().resolve())
    except ScaffoldError as exc:
        parser.exit(1, f"Error: {exc}\n")
    except OSError as exc:
        parser.exit(1, f"Category generation failed: {exc}\nRun with --verbose for more details.\n")

    rel_path = _relativize(result.path)
    print(f"Category project created at {rel_path}")
    print("\nNext steps:")
    print(f"  cd {rel_path}")
    print("  npm run install:all    # Install all examples")
    print("  npm run test:all       # Test all examples")
    print("\nCategory structure:")
    print(f"  {result.path.name}/")
    print("  ├── examples/")
    for index, example_id in enumerate(result.examples):
        branch = "└──" if index == len(result.examples) - 1 else "├──"
        print(f"  │   {branch} {example_id}/")
    for name in ("README.md", "CATEGORY_SUMMARY.md", "package.json"):
        print(f"  ├── {name}")
    print("  └── .gitignore")


def _run_docs(
    parser: argparse.ArgumentParser,
    args: argparse.Namespace,
    config: ScaffoldConfig,
    catalog: Catalog,
    renderer: TemplateRenderer,
) -> None:
    if args.help or (not args.example_id and not args.all_docs):
        print(f"FHEVM Documentation Generator\n\nUsage: {_PROG} docs <example-id | --all>\n")
        print(format_doc_listing(catalog))
        return

    generator = DocumentationGenerator(catalog, config.docs_dir, renderer=renderer)
    try:
        if args.all_docs:
            written = generator.generate_all()
            print(f"Generated {len(written)} documentation file(s) in {_relativize(config.docs_dir)}")
            return
        page = generator.generate_one(args.example_id)
    except OSError as exc:
        parser.exit(1, f"Documentation generation failed: {exc}\nRun with --verbose for more details.\n")

    if page is None:
        # The generator has already logged the warning.
        return
    print(f"Documentation written to {_relativize(page)}")


def format_example_listing(catalog: Catalog) -> str:
    lines: List[str] = ["Available examples:"]
    for example_id in catalog.list_example_ids():
        example = catalog.examples[example_id]
        lines.append(f"  {example.id}")
        lines.append(f"    {example.description}")
        lines.append(f"    Category: {example.category}")
    return "\n".join(lines)


def format_category_listing(catalog: Catalog) -> str:
    lines: List[str] = ["Available categories:"]
    for category_id in catalog.list_category_ids():
        category = catalog.categories[category_id]
        lines.append(f"  {category.id}")
        lines.append(f"    {category.title}")
        lines.append(f"    {category.description}")
        lines.append(f"    Examples: {', '.join(category.examples)}")
    return "\n".join(lines)


def format_doc_listing(catalog: Catalog) -> str:
    lines: List[str] = ["Available documentation entries:"]
    for doc_id in catalog.list_doc_ids():
        doc = catalog.docs[doc_id]
        lines.append(f"  {doc.id} ({doc.chapter}): {doc.title}")
    lines.append("\nUse --all to generate every page and SUMMARY.md.")
    return "\n".join(lines)


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
