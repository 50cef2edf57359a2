"""
Enrich Markdown content trees for publishing.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import logging
from typing import Mapping, Optional, Sequence

from typing_extensions import override

from .environment import MalformedNodeError
from .nodes import Element, Node, Text, is_heading
from .visitor import NodeVisitor, parent_of

LOGGER = logging.getLogger(__name__)


def code_text(code: Element) -> str:
    """
    Text of an inline code element that holds a single text node.

    :raises MalformedNodeError: If the element has nested markup or no text.
    """

    if len(code.children) != 1 or not isinstance(code.children[0], Text):
        raise MalformedNodeError("expected: a single text node in inline code")
    return code.children[0].value


class InlineCodeLinker(NodeVisitor):
    """
    Marks inline code as not to be translated, and links inline code to reference documentation.

    Inline code is linked if its text matches a key in the reference map verbatim, unless it is already inside a link
    or a heading.

    Original:
    ```
    <p>Call <code>foo</code> first.</p>
    ```

    Transformed:
    ```
    <p>Call <a href="/docs/foo" data-code-reference="true"><code class="notranslate" translate="no">foo</code></a> first.</p>
    ```
    """

    references: Mapping[str, str]

    def __init__(self, references: Mapping[str, str] | None = None) -> None:
        self.references = references or {}

    @override
    def matches(self, node: Node) -> bool:
        return isinstance(node, Element) and node.tag == "code"

    @override
    def transform(self, node: Node, ancestors: Sequence[Element]) -> Optional[Node]:
        if not isinstance(node, Element):
            return None

        # ensure inline code is not translated
        node.add_class("notranslate")
        node.properties["translate"] = "no"

        if not self.references:
            return None

        # skip linking inside headings and links
        parent = parent_of(ancestors)
        if parent is not None and (parent.tag == "a" or is_heading(parent)):
            return None

        try:
            text = code_text(node)
        except MalformedNodeError as ex:
            LOGGER.debug("Inline code not linked: %s", ex)
            return None

        url = self.references.get(text)
        if url is None:
            return None

        LOGGER.debug("Linking inline code %s to %s", text, url)
        return Element("a", {"href": url, "data-code-reference": "true"}, [node])
