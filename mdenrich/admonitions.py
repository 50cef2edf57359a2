"""
Enrich Markdown content trees for publishing.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import enum
import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from typing_extensions import override

from .environment import MalformedNodeError
from .nodes import Element, Node, Text
from .options import AdmonitionOptions
from .visitor import NodeVisitor

LOGGER = logging.getLogger(__name__)


@enum.unique
class _Scan(enum.Enum):
    "Position of the scanner among the children of a block-quote."

    LEADING = "leading"
    MARKER = "marker"


@dataclass
class AdmonitionMatch:
    """
    A block-quote recognized as an admonition.

    :param kind: Type keyword as written in the marker, e.g. `NOTE`.
    :param caption: The child element whose first text is the marker.
    """

    kind: str
    caption: Element


def match_admonition(blockquote: Element, types: Mapping[str, str]) -> AdmonitionMatch:
    """
    Recognizes a GitHub-style alert in a block-quote.

    Parsers emit a line break text node as the first child of a block-quote, followed by a paragraph. The marker
    `[!TYPE]` must be the exact text that opens the paragraph, which requires an empty line between the marker and
    the content:

    ```
    > [!NOTE]
    >
    > This is a note.
    ```

    This is a heuristic for a particular tree shape rather than a grammar.

    :raises MalformedNodeError: If the block-quote does not have the expected shape or type keyword.
    """

    state = _Scan.LEADING
    for child in blockquote.children:
        match state:
            case _Scan.LEADING:
                state = _Scan.MARKER
            case _Scan.MARKER:
                if not isinstance(child, Element) or not child.children:
                    raise MalformedNodeError("expected: element with content as second child of block-quote")
                first = child.children[0]
                if not isinstance(first, Text):
                    raise MalformedNodeError("expected: text as first node of marker element")
                marker = first.value
                if not marker.startswith("[!") or not marker.endswith("]"):
                    raise MalformedNodeError(f"expected: admonition marker `[!TYPE]`; got: {marker!r}")
                kind = marker[2:-1]
                if kind not in types:
                    raise MalformedNodeError(f"unrecognized admonition type: {kind}")
                return AdmonitionMatch(kind, child)

    raise MalformedNodeError("expected: at least two children in block-quote")


class AdmonitionTransformer(NodeVisitor):
    """
    Transforms block-quotes marked as GitHub-style alerts into callouts with a caption.

    Original:
    ```
    <blockquote>
    <p>[!NOTE]</p>
    <p>This is a note.</p>
    </blockquote>
    ```

    Transformed:
    ```
    <figure class="admonition" data-admonition-type="note">
    <figcaption>💬  Note</figcaption>
    <p>This is a note.</p>
    </figure>
    ```

    :see: https://docs.github.com/get-started/writing-on-github/getting-started-with-writing-and-formatting-on-github/basic-writing-and-formatting-syntax#alerts
    """

    options: AdmonitionOptions

    def __init__(self, options: AdmonitionOptions | None = None) -> None:
        self.options = options or AdmonitionOptions()

    @override
    def matches(self, node: Node) -> bool:
        return isinstance(node, Element) and node.tag == "blockquote"

    @override
    def transform(self, node: Node, ancestors: Sequence[Element]) -> Optional[Node]:
        if not isinstance(node, Element):
            return None

        try:
            found = match_admonition(node, self.options.types)
        except MalformedNodeError as ex:
            LOGGER.debug("Block-quote left intact: %s", ex)
            return None

        icon = self.options.types[found.kind]
        kind = found.kind.lower()

        node.tag = self.options.container_tag
        node.properties = {
            "class": [self.options.class_name],
            "data-admonition-type": kind,
        }
        found.caption.tag = self.options.caption_tag
        found.caption.children = [Text(f"{icon}  {kind.capitalize()}")]
        return None
