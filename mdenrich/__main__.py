"""
Enrich Markdown content trees for publishing.

Parses Markdown files, converts Markdown content into a content tree, applies enrichment passes (syntax highlighting,
heading anchors, link safeguards, image paths, table wrappers and admonitions), and writes HTML fragments.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import argparse
import logging
import os
import sys
from io import StringIO
from pathlib import Path
from typing import Optional

from . import __version__
from .clio import add_arguments, get_options
from .config import load_options, load_references
from .document import HTML_SUFFIXES, EnrichedDocument
from .environment import ArgumentError, ConversionError
from .highlighter import GrammarRegistry
from .options import PipelineOptions, ReferenceOptions
from .serializer import object_to_json_payload

LOGGER = logging.getLogger(__name__)


class Arguments(argparse.Namespace):
    path: Optional[Path]
    output: Optional[Path]
    config: Optional[Path]
    references: Optional[Path]
    loglevel: str
    dump_config: bool


def _add_config_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="YAML or JSON file with pipeline options. Command-line arguments take precedence.",
    )


def get_parser(defaults: PipelineOptions | None = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser()
    parser.prog = os.path.basename(os.path.dirname(__file__))
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("path", type=Path, nargs="?", help="Path to Markdown file, HTML file or directory to enrich.")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output file (for a single input file) or directory. If omitted, output is written next to the source.",
    )
    _add_config_argument(parser)
    parser.add_argument(
        "--references",
        type=Path,
        help="YAML or JSON file that maps inline code text to reference documentation URL.",
    )
    parser.add_argument(
        "-l",
        "--loglevel",
        choices=[
            logging.getLevelName(level).lower()
            for level in (
                logging.DEBUG,
                logging.INFO,
                logging.WARN,
                logging.ERROR,
                logging.CRITICAL,
            )
        ],
        default=logging.getLevelName(logging.INFO),
        help="Use this option to set the log verbosity.",
    )
    parser.add_argument(
        "--dump-config",
        action="store_true",
        default=False,
        help="Print effective pipeline options as JSON and exit.",
    )
    add_arguments(parser, PipelineOptions, defaults)
    return parser


def get_help() -> str:
    parser = get_parser()
    with StringIO() as buf:
        parser.print_help(file=buf)
        return buf.getvalue()


def _read_config(argv: Optional[list[str]]) -> Optional[Path]:
    "Looks up the configuration file path ahead of parsing all arguments such that its values act as defaults."

    parser = argparse.ArgumentParser(add_help=False)
    _add_config_argument(parser)
    args, _ = parser.parse_known_args(argv)
    return args.config


def _output_path(source: Path, root: Path, output: Optional[Path]) -> Path:
    if output is None:
        return source.with_suffix(".html")
    if root.is_dir():
        return output / source.relative_to(root).with_suffix(".html")
    return output


def process(path: Path, options: PipelineOptions, output: Optional[Path] = None) -> None:
    """
    Enriches a single file, or all Markdown files in a directory (recursively).

    :param path: Markdown file, HTML file or directory.
    :param options: Pipeline options applied to each document.
    :param output: Output file or directory.
    """

    if path.is_dir():
        sources = sorted(path.rglob("*.md"))
    elif path.is_file():
        sources = [path]
    else:
        raise ArgumentError(f"expected: existing file or directory; got: {path}")

    # grammars are loaded once and shared by all documents
    registry = GrammarRegistry()
    for source in sources:
        document = EnrichedDocument.create(source, options, registry=registry)
        target = _output_path(source, path, output)
        if target.resolve() == source.resolve():
            raise ArgumentError(f"output would overwrite source: {source}")

        LOGGER.info("Writing enriched document %s to %s", document.title or source.name, target)
        os.makedirs(target.parent, exist_ok=True)
        with open(target, "w", encoding="utf-8") as f:
            f.write(document.html())


def main(argv: Optional[list[str]] = None) -> None:
    try:
        config_path = _read_config(argv)
        defaults = load_options(config_path) if config_path is not None else PipelineOptions()
    except (ArgumentError, OSError) as ex:
        print(f"error: {ex}", file=sys.stderr)
        sys.exit(2)

    parser = get_parser(defaults)
    args = Arguments()
    parser.parse_args(argv, namespace=args)

    logging.basicConfig(
        level=getattr(logging, args.loglevel.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(funcName)s [%(lineno)d] - %(message)s",
    )

    options = get_options(args, PipelineOptions, defaults)
    if args.references is not None:
        try:
            options.inline_code = ReferenceOptions(load_references(args.references))
        except (ArgumentError, OSError) as ex:
            parser.error(str(ex))

    if args.dump_config:
        print(object_to_json_payload(options).decode("utf-8"))
        return

    if args.path is None:
        parser.error("the following arguments are required: path")

    if args.path.suffix.lower() in HTML_SUFFIXES and args.output is None:
        parser.error("an output file is required for HTML input")

    try:
        process(args.path, options, args.output)
    except ArgumentError as ex:
        parser.error(str(ex))
    except ConversionError as ex:
        LOGGER.error("Failed to convert document: %s", ex)
        if ex.__cause__ is not None:
            LOGGER.error(ex.__cause__)
        sys.exit(1)


if __name__ == "__main__":
    main()
