"""
Enrich Markdown content trees for publishing.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import logging
from pathlib import Path
from typing import Optional

from cattrs import BaseValidationError
from lxml.etree import ParserError

from .environment import ConversionError, MalformedNodeError, StructuralError
from .frontmatter import DocumentProperties, extract_frontmatter_object
from .headings import Slugify
from .highlighter import GrammarRegistry
from .markdown import markdown_to_html
from .nodes import Node
from .options import PipelineOptions
from .pipeline import Pipeline
from .toc import TableOfContentsBuilder, TableOfContentsEntry
from .xhtml import tree_from_html, tree_to_html

LOGGER = logging.getLogger(__name__)

HTML_SUFFIXES = (".html", ".htm")


class EnrichedDocument:
    "Encapsulates a content tree created by parsing a Markdown (or HTML) document and applying enrichment passes."

    title: Optional[str]
    toc: list[TableOfContentsEntry]
    root: Node

    @classmethod
    def create(
        cls,
        path: Path,
        options: PipelineOptions | None = None,
        *,
        registry: GrammarRegistry | None = None,
        slugify: Slugify | None = None,
    ) -> "EnrichedDocument":
        """
        Reads and enriches a Markdown document, or an HTML fragment if the file has an `.html` extension.

        :raises ConversionError: If the document cannot be parsed or enriched.
        """

        LOGGER.info("Processing document: %s", path)
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()

        pipeline = Pipeline.create(options, registry=registry, slugify=slugify)
        try:
            if path.suffix.lower() in HTML_SUFFIXES:
                return cls(text, pipeline, properties=None)
            else:
                return cls.from_markdown(text, pipeline)
        except (BaseValidationError, ParserError, StructuralError, MalformedNodeError) as ex:
            raise ConversionError(str(path)) from ex

    @classmethod
    def from_markdown(cls, text: str, pipeline: Pipeline | None = None) -> "EnrichedDocument":
        "Parses a Markdown document with optional YAML front-matter, and applies enrichment passes."

        properties, text = extract_frontmatter_object(DocumentProperties, text)
        return cls(markdown_to_html(text), pipeline, properties=properties)

    def __init__(
        self,
        html: str,
        pipeline: Pipeline | None = None,
        *,
        properties: DocumentProperties | None = None,
    ) -> None:
        "Enriches a content tree parsed from an HTML fragment."

        pipeline = pipeline or Pipeline.create()

        # table of contents is discovered by the heading pass, if any
        toc = TableOfContentsBuilder()
        self.root = pipeline.run(tree_from_html(html), toc=toc)
        self.toc = toc.entries

        if properties is not None and properties.title:
            self.title = properties.title
        else:
            self.title = toc.get_title()

    def html(self) -> str:
        return tree_to_html(self.root)
