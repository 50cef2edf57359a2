"""
Enrich Markdown content trees for publishing.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

from typing import Optional, Sequence

from typing_extensions import override

from .nodes import Element, Node
from .options import TableOptions
from .visitor import NodeVisitor, parent_of


class TableWrapper(NodeVisitor):
    """
    Wraps tables in a container element for styling (e.g. horizontal scrolling).

    A table whose parent is already a wrapper element is left as-is, which makes the pass idempotent, and stops the
    traversal from wrapping a table again when it descends into the new wrapper.

    Original:
    ```
    <table>...</table>
    ```

    Transformed:
    ```
    <figure class="table-wrapper"><table>...</table></figure>
    ```
    """

    options: TableOptions

    def __init__(self, options: TableOptions | None = None) -> None:
        self.options = options or TableOptions()

    @override
    def matches(self, node: Node) -> bool:
        return isinstance(node, Element) and node.tag == "table"

    @override
    def transform(self, node: Node, ancestors: Sequence[Element]) -> Optional[Node]:
        parent = parent_of(ancestors)
        if parent is not None and parent.tag == self.options.wrapper_tag:
            return None

        return Element(self.options.wrapper_tag, {"class": [self.options.class_name]}, [node])
