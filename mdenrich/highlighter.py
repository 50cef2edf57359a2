"""
Enrich Markdown content trees for publishing.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import html
import logging
from typing import Iterable, Optional, Sequence

from typing_extensions import override

import pygments
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from .environment import UnknownLanguageError
from .nodes import CodeBlock, Element, Node, PropertyMap, Raw
from .options import HighlightOptions
from .visitor import NodeVisitor

LOGGER = logging.getLogger(__name__)

PLAIN_TEXT = "text"


class GrammarRegistry:
    """
    Grammars (Pygments lexers) available for syntax highlighting, keyed by language identifier.

    The registry is populated explicitly with `load`; highlighting source in a language that has not been loaded fails
    with `UnknownLanguageError`. Plain text is always available.
    """

    _lexers: dict[str, Lexer]
    _formatter: HtmlFormatter

    def __init__(self, language_ids: Iterable[str] = ()) -> None:
        self._lexers = {}
        self._formatter = HtmlFormatter(nowrap=True)
        self.load([PLAIN_TEXT, *language_ids])

    def load(self, language_ids: Iterable[str]) -> None:
        "Registers grammars for the given language identifiers. Identifiers without a known grammar are skipped."

        for language_id in language_ids:
            if language_id in self._lexers:
                continue

            try:
                self._lexers[language_id] = get_lexer_by_name(language_id)
            except ClassNotFound:
                LOGGER.warning("No grammar available for language: %s", language_id)

    def __contains__(self, language_id: object) -> bool:
        return language_id in self._lexers

    def highlight(self, text: str, language_id: str) -> str:
        """
        Converts source code into markup with syntax highlighting.

        :param text: Source code.
        :param language_id: Language identifier of a registered grammar.
        :returns: Markup in which tokens are wrapped in `<span>` elements.
        :raises UnknownLanguageError: If no grammar has been registered for the language.
        """

        lexer = self._lexers.get(language_id)
        if lexer is None:
            raise UnknownLanguageError(language_id)

        return pygments.highlight(text, lexer, self._formatter)


def parse_title(meta: str) -> str:
    "Extracts a title from fence metadata written as `[title]`, removing the first opening and closing bracket."

    return meta.replace("[", "", 1).replace("]", "", 1)


def parse_language_and_title(lang: str | None, meta: str | None, default_language: str = PLAIN_TEXT) -> tuple[str, str | None]:
    """
    Determines the language and the optional title of a code block.

    A title is recognized only if a language is given, e.g. ```` ```python [main.py] ````.
    """

    if lang and meta:
        return lang, parse_title(meta)
    elif lang:
        return lang, None
    else:
        return default_language, None


class CodeHighlighter(NodeVisitor):
    """
    Converts fenced code blocks into `<pre>` elements holding highlighted markup.

    Original:
    ```
    CodeBlock(value="print(1)", lang="python", meta="[main.py]")
    ```

    Transformed:
    ```
    <pre class="language-python notranslate" translate="no" data-code-language="Python" data-code-title="main.py">...</pre>
    ```
    """

    options: HighlightOptions
    registry: GrammarRegistry

    def __init__(self, options: HighlightOptions, registry: GrammarRegistry | None = None) -> None:
        self.options = options
        self.registry = registry if registry is not None else GrammarRegistry()
        self.registry.load(options.language_names.keys())

    @override
    def matches(self, node: Node) -> bool:
        return isinstance(node, CodeBlock)

    @override
    def transform(self, node: Node, ancestors: Sequence[Element]) -> Optional[Node]:
        if not isinstance(node, CodeBlock):
            return None

        language, title = parse_language_and_title(node.lang, node.meta, self.options.default_language)

        try:
            markup = self.registry.highlight(node.value, language).strip()
        except UnknownLanguageError as ex:
            LOGGER.warning("Code block emitted without highlighting: %s", ex)
            markup = html.escape(node.value.strip(), quote=False)

        properties: PropertyMap = {
            "class": [f"language-{language}", "notranslate"],
            "translate": "no",
        }

        language_name = self.options.language_names.get(language)
        if language_name:
            properties["data-code-language"] = language_name
        if title:
            properties["data-code-title"] = title

        return Element("pre", properties, [Raw(markup)])
