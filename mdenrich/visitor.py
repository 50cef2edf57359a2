"""
Enrich Markdown content trees for publishing.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence, Union

from .nodes import Element, Node

Predicate = Callable[[Node], bool]
Test = Union[Predicate, str, type, None]
"Selects nodes to visit: a predicate, a tag name (for elements), a node class, or `None` for all nodes."

Visitor = Callable[[Node], Optional[Node]]
AncestorVisitor = Callable[[Node, Sequence[Element]], Optional[Node]]


def is_element(*tags: str) -> Predicate:
    "A predicate that matches elements with any of the given tag names."

    def _matches(node: Node) -> bool:
        return isinstance(node, Element) and node.tag in tags

    return _matches


def _as_predicate(test: Test) -> Predicate:
    if test is None:
        return lambda node: True
    elif isinstance(test, str):
        return is_element(test)
    elif isinstance(test, type):
        node_type = test
        return lambda node: isinstance(node, node_type)
    else:
        return test


def visit_parents(tree: Node, test: Test, visitor: AncestorVisitor) -> Node:
    """
    Visits nodes depth-first in pre-order, passing the chain of ancestors to the visitor.

    The visitor may mutate the node it receives, or return a replacement node, which takes the place of the original.
    Traversal then continues into the children of the (possibly replaced) node. Exceptions raised by the test or the
    visitor propagate to the caller.

    :param tree: Root of the tree to traverse.
    :param test: Selects the nodes passed to the visitor.
    :param visitor: Called with a matching node and its ancestors, starting with the root and ending with the parent.
    :returns: Root of the tree, which is a new node if the visitor replaced the original root.
    """

    predicate = _as_predicate(test)
    ancestors: list[Element] = []

    def _walk(node: Node) -> Node:
        if predicate(node):
            replacement = visitor(node, tuple(ancestors))
            if replacement is not None:
                node = replacement

        if isinstance(node, Element):
            ancestors.append(node)
            index = 0
            while index < len(node.children):
                node.children[index] = _walk(node.children[index])
                index += 1
            ancestors.pop()

        return node

    return _walk(tree)


def visit(tree: Node, test: Test, visitor: Visitor) -> Node:
    """
    Visits nodes depth-first in pre-order.

    :see: `visit_parents` for traversal semantics.
    """

    return visit_parents(tree, test, lambda node, ancestors: visitor(node))


def parent_of(ancestors: Sequence[Element]) -> Element | None:
    "The immediate parent in an ancestor chain, or `None` for the root."

    return ancestors[-1] if ancestors else None


class NodeVisitor(ABC):
    "A pass that rewrites the nodes of a tree that match a structural test."

    def __call__(self, tree: Node) -> Node:
        "Applies the pass to a tree, and returns the root of the transformed tree."

        return visit_parents(tree, self.matches, self.transform)

    @abstractmethod
    def matches(self, node: Node) -> bool: ...

    @abstractmethod
    def transform(self, node: Node, ancestors: Sequence[Element]) -> Optional[Node]: ...
