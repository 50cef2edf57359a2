"""
Enrich Markdown content trees for publishing.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import re
from typing_extensions import override

import markdown
from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor

_FENCE_OPEN_REGEXP = re.compile(r"^(?P<indent>[ ]{0,3})(?P<fence>`{3,}|~{3,})[ ]*(?P<lang>[\w#+.-]+)(?:[ ]+(?P<meta>[^{}\n]*?))?[ ]*$")
_FENCE_CLOSE_REGEXP = re.compile(r"^[ ]{0,3}(?P<fence>`{3,}|~{3,})[ ]*$")


def fence_to_attributes(line: str) -> str | None:
    """
    Rewrites the opening fence of a code block such that text after the language identifier is preserved.

    Original:
    ```
    ```python [main.py]
    ```

    Transformed:
    ```
    ```{.python data-meta="[main.py]"}
    ```

    :returns: The opening fence in attribute list form, or `None` if the line carries no metadata.
    """

    m = _FENCE_OPEN_REGEXP.match(line)
    if m is None or not m.group("meta"):
        return None

    # attribute list values are enclosed in double quotes
    meta = m.group("meta").replace('"', "'")
    return f'{m.group("indent")}{m.group("fence")}{{.{m.group("lang")} data-meta="{meta}"}}'


class FenceMetadataPreprocessor(Preprocessor):
    "Preserves the metadata string that follows the language identifier on the opening fence of a code block."

    @override
    def run(self, lines: list[str]) -> list[str]:
        result: list[str] = []
        fence: str | None = None
        for line in lines:
            if fence is None:
                m = _FENCE_OPEN_REGEXP.match(line)
                if m is not None:
                    fence = m.group("fence")
                    rewritten = fence_to_attributes(line)
                    result.append(rewritten if rewritten is not None else line)
                    continue
                m = _FENCE_CLOSE_REGEXP.match(line)
                if m is not None:
                    fence = m.group("fence")
            else:
                m = _FENCE_CLOSE_REGEXP.match(line)
                if m is not None and m.group("fence")[0] == fence[0] and len(m.group("fence")) >= len(fence):
                    fence = None
            result.append(line)
        return result


class FenceMetadataExtension(Extension):
    @override
    def extendMarkdown(self, md: markdown.Markdown) -> None:
        # must run before `fenced_code` (priority 25)
        md.preprocessors.register(FenceMetadataPreprocessor(md), "fence_metadata", 28)


_CONVERTER = markdown.Markdown(
    extensions=[
        "attr_list",
        "fenced_code",
        "footnotes",
        "markdown.extensions.tables",
        "pymdownx.magiclink",
        "pymdownx.tilde",
        "sane_lists",
        FenceMetadataExtension(),
    ],
    extension_configs={
        "footnotes": {"BACKLINK_TITLE": ""},
    },
)


def markdown_to_html(content: str) -> str:
    """
    Converts a Markdown document into HTML with Python-Markdown.

    :param content: Markdown input as a string.
    :returns: HTML output as a string.
    :see: https://python-markdown.github.io/
    """

    _CONVERTER.reset()
    html = _CONVERTER.convert(content)
    return html
