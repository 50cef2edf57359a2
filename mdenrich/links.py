"""
Enrich Markdown content trees for publishing.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import re
from typing import Optional, Sequence

from typing_extensions import override

from .nodes import Element, Node
from .options import LinkOptions
from .visitor import NodeVisitor

_WEB_URL_REGEXP = re.compile(r"^https?://")


def is_web_url(url: str) -> bool:
    "True if the URL starts with the scheme `http://` or `https://`."

    return _WEB_URL_REGEXP.match(url) is not None


class ExternalLinkSafeguard(NodeVisitor):
    "Opens external links in a new browsing context without granting access to the opener or leaking the referrer."

    options: LinkOptions

    def __init__(self, options: LinkOptions | None = None) -> None:
        self.options = options or LinkOptions()

    @override
    def matches(self, node: Node) -> bool:
        return isinstance(node, Element) and node.tag == "a"

    @override
    def transform(self, node: Node, ancestors: Sequence[Element]) -> Optional[Node]:
        if not isinstance(node, Element):
            return None

        href = node.get("href")
        if not isinstance(href, str) or not href:
            return None

        if is_web_url(href):
            node.properties["rel"] = self.options.rel
            node.properties["target"] = self.options.target
        return None
