"""
Enrich Markdown content trees for publishing.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

from dataclasses import dataclass, field


@dataclass
class TableOfContentsEntry:
    """
    A section heading, and the headings nested under it.

    :param level: Heading level in the source document, e.g. `1` for `<h1>`.
    :param text: Plain text of the heading.
    :param identifier: Anchor that links to the heading.
    :param children: Headings in the section opened by this heading.
    """

    level: int
    text: str
    identifier: str
    children: list["TableOfContentsEntry"] = field(default_factory=list)


class TableOfContentsBuilder:
    "Collects section headings, in document order, into a hierarchy of sections."

    entries: list[TableOfContentsEntry]
    _open_sections: list[TableOfContentsEntry]

    def __init__(self) -> None:
        self.entries = []
        self._open_sections = []

    def add(self, level: int, text: str, identifier: str) -> TableOfContentsEntry:
        """
        Records a heading, nesting it under the closest preceding heading with a lower level.

        :raises ValueError: If the level is not that of an HTML heading.
        """

        if not 1 <= level <= 6:
            raise ValueError(f"expected: heading level between 1 and 6; got: {level}")

        # a heading closes all sections at the same or a deeper level
        while self._open_sections and self._open_sections[-1].level >= level:
            self._open_sections.pop()

        entry = TableOfContentsEntry(level, text, identifier)
        if self._open_sections:
            self._open_sections[-1].children.append(entry)
        else:
            self.entries.append(entry)
        self._open_sections.append(entry)
        return entry

    def get_title(self) -> str | None:
        "Text of the top-level heading if it is the only one, which makes it a candidate for the document title."

        if len(self.entries) != 1:
            return None
        return self.entries[0].text
