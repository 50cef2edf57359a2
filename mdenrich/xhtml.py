"""
Enrich Markdown content trees for publishing.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import html
import re
import uuid

import lxml.html
from lxml.html import HtmlElement

from .nodes import CodeBlock, Element, Node, PropertyValue, Raw, Text

ROOT_TAG = "root"

_LANGUAGE_PREFIX = "language-"

# markers in the Unicode private use area that stand in for pre-rendered markup during serialization
_RAW_BEGIN = "\ue000"
_RAW_END = "\ue001"


def _append_node(children: list[Node], node: Node) -> None:
    "Appends a node to a list of children, merging adjacent text nodes."

    if isinstance(node, Text) and children:
        last = children[-1]
        if isinstance(last, Text):
            last.value += node.value
            return
    children.append(node)


def _code_block(pre: HtmlElement) -> CodeBlock | None:
    "Recognizes `<pre><code class='language-x'>...</code></pre>` emitted by Markdown parsers for fenced code."

    if len(pre) != 1 or (pre.text and pre.text.strip()):
        return None
    code = pre[0]
    if code.tag != "code" or (code.tail and code.tail.strip()):
        return None

    lang: str | None = None
    for class_name in code.get("class", "").split():
        if class_name.startswith(_LANGUAGE_PREFIX):
            lang = class_name.removeprefix(_LANGUAGE_PREFIX)
            break

    return CodeBlock(code.text_content(), lang, code.get("data-meta"))


def _node_from_element(elem: HtmlElement) -> Node:
    if elem.tag == "pre":
        block = _code_block(elem)
        if block is not None:
            return block

    node = Element(str(elem.tag), {str(name): str(value) for name, value in elem.attrib.items()})
    if elem.text:
        _append_node(node.children, Text(elem.text))
    for child in elem:
        # skip comments and processing instructions but keep the text that follows them
        if isinstance(child.tag, str):
            _append_node(node.children, _node_from_element(child))
        if child.tail:
            _append_node(node.children, Text(child.tail))
    return node


def tree_from_html(content: str) -> Element:
    """
    Parses an HTML fragment into a content tree.

    :param content: HTML fragment, e.g. the output of a Markdown parser.
    :returns: An element tagged `root` that holds the nodes of the fragment.
    """

    if not content.strip():
        return Element(ROOT_TAG, {}, [Text(content)] if content else [])

    container = lxml.html.fragment_fromstring(content, create_parent=ROOT_TAG)
    root = _node_from_element(container)
    if not isinstance(root, Element):
        raise TypeError("expected: element as root of parsed fragment")
    return root


def _property_to_attribute(value: PropertyValue) -> str | None:
    if value is True:
        return ""
    if value is False:
        return None
    if isinstance(value, list):
        return " ".join(value)
    return value


class _Serializer:
    "Builds an lxml tree from a content tree, replacing pre-rendered markup with placeholders."

    raw: list[str]
    nonce: str

    def __init__(self) -> None:
        self.raw = []

        # placeholders are unique to a single serialization such that document text cannot imitate them
        self.nonce = uuid.uuid4().hex

    def placeholder(self, markup: str) -> str:
        self.raw.append(markup)
        return f"{_RAW_BEGIN}{self.nonce}:{len(self.raw) - 1}{_RAW_END}"

    def append(self, parent: HtmlElement, node: Node) -> None:
        if isinstance(node, Text):
            self.append_text(parent, node.value)
        elif isinstance(node, Raw):
            self.append_text(parent, self.placeholder(node.value))
        elif isinstance(node, CodeBlock):
            properties: dict[str, PropertyValue] = {}
            if node.lang:
                properties["class"] = [f"{_LANGUAGE_PREFIX}{node.lang}"]
            if node.meta:
                properties["data-meta"] = node.meta
            code = self.element(Element("code", properties, [Text(node.value)]))
            pre = lxml.html.Element("pre")
            pre.append(code)
            parent.append(pre)
        else:
            parent.append(self.element(node))

    @staticmethod
    def append_text(parent: HtmlElement, text: str) -> None:
        if len(parent):
            last = parent[-1]
            last.tail = (last.tail or "") + text
        else:
            parent.text = (parent.text or "") + text

    def element(self, node: Element) -> HtmlElement:
        elem = lxml.html.Element(node.tag)
        for name, value in node.properties.items():
            attribute = _property_to_attribute(value)
            if attribute is not None:
                elem.set(name, attribute)
        for child in node.children:
            self.append(elem, child)
        return elem

    def finalize(self, content: str) -> str:
        if not self.raw:
            return content

        def _substitute(m: re.Match[str]) -> str:
            index = int(m.group(1))
            if index < len(self.raw):
                return self.raw[index]
            return m.group(0)

        return re.sub(f"{_RAW_BEGIN}{self.nonce}:(\\d+){_RAW_END}", _substitute, content)


def tree_to_html(tree: Node) -> str:
    """
    Serializes a content tree into an HTML fragment.

    The children of an element tagged `root` are emitted without the enclosing element. Pre-rendered markup is
    emitted verbatim.

    :param tree: Content tree, typically returned by `tree_from_html` and enriched by a pipeline.
    :returns: HTML fragment as a string.
    """

    serializer = _Serializer()
    container = lxml.html.Element("div")
    if isinstance(tree, Element) and tree.tag == ROOT_TAG:
        for child in tree.children:
            serializer.append(container, child)
    else:
        serializer.append(container, tree)

    parts: list[str] = []
    if container.text:
        parts.append(html.escape(container.text, quote=False))
    for child in container:
        parts.append(lxml.html.tostring(child, encoding="unicode", method="html", with_tail=False))
        if child.tail:
            parts.append(html.escape(child.tail, quote=False))
    return serializer.finalize("".join(parts))
