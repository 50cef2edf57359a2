"""
Enrich Markdown content trees for publishing.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import logging
import re
from typing import Callable, Optional, Sequence

from typing_extensions import override

from .environment import ArgumentError
from .nodes import Element, Node, heading_level, to_text
from .options import HeadingOptions
from .toc import TableOfContentsBuilder
from .visitor import NodeVisitor

LOGGER = logging.getLogger(__name__)

Slugify = Callable[[str], str]


def title_to_identifier(title: str) -> str:
    "Converts a section heading title to a GitHub-style Markdown same-page anchor."

    s = title.strip().lower()
    s = re.sub(r"[^\sA-Za-z0-9_\-]", "", s)
    s = re.sub(r"\s+", "-", s)
    return s


def _anchor_identifier(heading: Element) -> str | None:
    "Identifier of the self-link anchor that wraps the content of a heading, if the heading has already been anchored."

    if len(heading.children) != 1:
        return None
    anchor = heading.children[0]
    if not isinstance(anchor, Element) or anchor.tag != "a":
        return None
    identifier = anchor.get("id")
    if isinstance(identifier, str) and anchor.get("href") == f"#{identifier}":
        return identifier
    return None


class _HeadingVisitor(NodeVisitor):
    "Visits the headings of a single tree, tracking identifiers already assigned in that tree."

    normalizer: "HeadingNormalizer"
    toc: TableOfContentsBuilder
    occurrences: dict[str, int]

    def __init__(self, normalizer: "HeadingNormalizer", toc: TableOfContentsBuilder) -> None:
        self.normalizer = normalizer
        self.toc = toc
        self.occurrences = {}

    def assign_identifier(self, slug: str) -> str:
        if slug not in self.occurrences:
            self.occurrences[slug] = 0
            return slug

        if not self.normalizer.options.unique_ids:
            LOGGER.warning("Duplicate heading identifier: %s", slug)
            return slug

        # same rules as GitHub: append `-1`, `-2`, ... skipping identifiers already taken
        identifier = slug
        while identifier in self.occurrences:
            self.occurrences[slug] += 1
            identifier = f"{slug}-{self.occurrences[slug]}"
        self.occurrences[identifier] = 0
        return identifier

    @override
    def matches(self, node: Node) -> bool:
        return heading_level(node) is not None

    @override
    def transform(self, node: Node, ancestors: Sequence[Element]) -> Optional[Node]:
        level = heading_level(node)
        if not isinstance(node, Element) or level is None:
            return None

        node.tag = f"h{self.normalizer.clamp(level)}"

        # text must be captured before content is moved into the anchor
        text = to_text(node)

        identifier = _anchor_identifier(node)
        if identifier is not None:
            self.occurrences.setdefault(identifier, 0)
        else:
            identifier = self.assign_identifier(self.normalizer.slugify(text))
            anchor = Element("a", {"href": f"#{identifier}", "id": identifier}, node.children)
            node.children = [anchor]

        # table of contents reflects the structure of the source document
        self.toc.add(level, text, identifier)
        return None


class HeadingNormalizer:
    """
    Clamps heading levels into a range, and makes each heading a link to itself.

    Original:
    ```
    <h1>Heading <em>text</em></h1>
    ```

    Transformed (with minimum level 2):
    ```
    <h2><a href="#heading-text" id="heading-text">Heading <em>text</em></a></h2>
    ```

    The pass holds configuration only. Duplicate identifiers are tracked within a single tree, and a table of contents
    is collected by the caller that passes a builder to `normalize`.
    """

    options: HeadingOptions
    slugify: Slugify

    def __init__(self, options: HeadingOptions | None = None, slugify: Slugify | None = None) -> None:
        options = options or HeadingOptions()
        if not 1 <= options.min_level <= options.max_level <= 6:
            raise ArgumentError(f"expected: 1 <= min_level <= max_level <= 6; got: {options.min_level} and {options.max_level}")

        self.options = options
        self.slugify = slugify or title_to_identifier

    def __call__(self, tree: Node) -> Node:
        return self.normalize(tree, TableOfContentsBuilder())

    def normalize(self, tree: Node, toc: TableOfContentsBuilder) -> Node:
        """
        Applies the pass to a tree.

        :param tree: Content tree to transform in place.
        :param toc: Receives the headings of the tree at their source level.
        :returns: Root of the transformed tree.
        """

        return _HeadingVisitor(self, toc)(tree)

    def clamp(self, level: int) -> int:
        "Brings a heading level into the configured range."

        return min(max(level, self.options.min_level), self.options.max_level)
