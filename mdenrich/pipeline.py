"""
Enrich Markdown content trees for publishing.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import logging
from typing import Callable, Iterable

from .admonitions import AdmonitionTransformer
from .environment import ArgumentError, StructuralError
from .headings import HeadingNormalizer, Slugify
from .highlighter import CodeHighlighter, GrammarRegistry
from .images import ImagePathRewriter
from .links import ExternalLinkSafeguard
from .nodes import Node, check_tree
from .options import PassName, PipelineOptions
from .references import InlineCodeLinker
from .tables import TableWrapper
from .toc import TableOfContentsBuilder

LOGGER = logging.getLogger(__name__)

Transform = Callable[[Node], Node]
"A pass over a content tree that returns the (possibly replaced) root."


def _transform_name(transform: Transform) -> str:
    return getattr(transform, "__name__", type(transform).__name__)


class Pipeline:
    """
    Applies a sequence of passes to a content tree, in order.

    Each pass completes its traversal before the next pass begins. When validation is on, the tree is checked for
    well-formedness after each pass such that a structural error can be attributed to the pass that caused it.
    """

    transforms: list[Transform]
    validate: bool

    def __init__(self, transforms: Iterable[Transform], *, validate: bool = True) -> None:
        self.transforms = list(transforms)
        self.validate = validate

    @classmethod
    def create(
        cls,
        options: PipelineOptions | None = None,
        *,
        registry: GrammarRegistry | None = None,
        slugify: Slugify | None = None,
    ) -> "Pipeline":
        """
        Builds a pipeline with the passes named in the options.

        :param options: Configuration of passes, and the order in which they are applied.
        :param registry: Grammars for syntax highlighting, shared across pipelines to avoid loading grammars repeatedly.
        :param slugify: Converts heading text into an identifier.
        """

        options = options or PipelineOptions()

        def _create(name: PassName) -> Transform:
            match name:
                case "code":
                    return CodeHighlighter(options.code, registry)
                case "inline_code":
                    return InlineCodeLinker(options.inline_code.references)
                case "links":
                    return ExternalLinkSafeguard(options.links)
                case "headings":
                    return HeadingNormalizer(options.headings, slugify)
                case "images":
                    return ImagePathRewriter(options.images)
                case "tables":
                    return TableWrapper(options.tables)
                case "admonitions":
                    return AdmonitionTransformer(options.admonitions)
                case _:
                    raise ArgumentError(f"unrecognized pass: {name}")

        return cls((_create(name) for name in options.passes), validate=options.validate)

    def run(self, tree: Node, *, toc: TableOfContentsBuilder | None = None) -> Node:
        """
        Applies all passes to a content tree.

        :param tree: Content tree, exclusively owned by this call.
        :param toc: Receives the headings found by the heading pass, if the pipeline has one.
        :returns: Root of the enriched tree, which is the input root unless a pass replaced it.
        :raises StructuralError: If a pass breaks the well-formedness of the tree.
        """

        for transform in self.transforms:
            name = _transform_name(transform)
            LOGGER.debug("Applying pass: %s", name)
            if toc is not None and isinstance(transform, HeadingNormalizer):
                tree = transform.normalize(tree, toc)
            else:
                tree = transform(tree)
            if self.validate:
                try:
                    check_tree(tree)
                except StructuralError as ex:
                    raise StructuralError(f"pass {name} produced a malformed tree: {ex}") from ex
        return tree

    __call__ = run
