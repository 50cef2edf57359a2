"""
Enrich Markdown content trees for publishing.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import functools
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Union

from .environment import StructuralError

PropertyValue = str | bool | list[str]
"Value of an element property: a string, a boolean flag, or a list of distinct strings such as class names."


@dataclass
class Text:
    """
    A run of character data.

    :param value: The text, with entities resolved.
    """

    value: str


@dataclass
class Raw:
    """
    Pre-rendered markup, emitted verbatim when the tree is serialized.

    :param value: Markup as a string.
    """

    value: str


@dataclass
class CodeBlock:
    """
    A fenced code block whose source has not been highlighted yet.

    :param value: Source code.
    :param lang: Language identifier given after the opening fence, if any.
    :param meta: Text that follows the language identifier on the opening fence, e.g. `[title]`.
    """

    value: str
    lang: str | None = None
    meta: str | None = None


@dataclass
class Element:
    """
    An element with a tag name, properties (attributes) and an ordered list of children.

    The element exclusively owns its children. The `class` property is always held as a list of class names.
    """

    tag: str
    properties: dict[str, PropertyValue] = field(default_factory=dict)
    children: list["Node"] = field(default_factory=list)

    def __post_init__(self) -> None:
        class_value = self.properties.get("class")
        if isinstance(class_value, str):
            self.properties["class"] = class_value.split()

    def get(self, name: str) -> PropertyValue | None:
        return self.properties.get(name)

    @property
    def classes(self) -> list[str]:
        value = self.properties.get("class")
        if isinstance(value, list):
            return value
        return []

    def add_class(self, name: str) -> None:
        "Adds a class name unless the element already has it."

        classes = list(self.classes)
        if name not in classes:
            classes.append(name)
        self.properties["class"] = classes


Node = Union[Text, Element, CodeBlock, Raw]
"A node in a content tree."

PropertyMap = dict[str, PropertyValue]


class NodeMaker:
    """
    Builds element trees with a compact syntax, e.g. `E.p("Some ", E.em("emphasized"), " text")`.

    Positional arguments that are dictionaries are merged into the properties, strings become text nodes, and other
    nodes are appended as children.
    """

    def __call__(self, tag: str, *args: PropertyMap | str | Node) -> Element:
        properties: PropertyMap = {}
        children: list[Node] = []
        for arg in args:
            if isinstance(arg, dict):
                properties.update(arg)
            elif isinstance(arg, str):
                children.append(Text(arg))
            else:
                children.append(arg)
        return Element(tag, properties, children)

    def __getattr__(self, tag: str) -> Callable[..., Element]:
        if tag.startswith("_"):
            raise AttributeError(tag)
        return functools.partial(self, tag)


E = NodeMaker()

_HEADING_REGEXP = re.compile(r"^h([1-6])$")


def heading_level(node: Any) -> int | None:
    "Heading level 1 to 6 if the node is a heading element `<h1>` to `<h6>`, or `None` otherwise."

    if not isinstance(node, Element):
        return None
    m = _HEADING_REGEXP.match(node.tag)
    if m is None:
        return None
    return int(m.group(1))


def is_heading(node: Any) -> bool:
    return heading_level(node) is not None


def iter_text(node: Node) -> Iterator[str]:
    "Yields text contained in a node and its descendants in document order."

    if isinstance(node, Text):
        yield node.value
    elif isinstance(node, CodeBlock):
        yield node.value
    elif isinstance(node, Element):
        for child in node.children:
            yield from iter_text(child)


def to_text(node: Node) -> str:
    "Concatenated text content of a node, independent of markup."

    return "".join(iter_text(node))


def _describe(node: Node) -> str:
    if isinstance(node, Element):
        return f"<{node.tag}>"
    return type(node).__name__


def check_tree(root: Node) -> None:
    """
    Verifies that a tree is well-formed: every node has exactly one owner, and there are no cycles.

    :raises StructuralError: If a node is shared or a child is not a node.
    """

    seen: set[int] = set()
    stack: list[Any] = [root]
    while stack:
        node = stack.pop()
        if not isinstance(node, (Text, Element, CodeBlock, Raw)):
            raise StructuralError(f"expected: node; got: {type(node).__name__}")
        if id(node) in seen:
            raise StructuralError(f"node appears more than once in tree: {_describe(node)}")
        seen.add(id(node))
        if isinstance(node, Element):
            stack.extend(node.children)
