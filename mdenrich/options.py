"""
Enrich Markdown content trees for publishing.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

from dataclasses import dataclass, field
from typing import Literal

from .clio import boolean_option, composite_option, value_option

PassName = Literal["code", "inline_code", "links", "headings", "images", "tables", "admonitions"]

DEFAULT_PASSES: list[PassName] = ["code", "inline_code", "links", "headings", "images", "tables", "admonitions"]

DEFAULT_LANGUAGE_NAMES: dict[str, str] = {
    "bash": "Bash",
    "c": "C",
    "cpp": "C++",
    "css": "CSS",
    "diff": "Diff",
    "go": "Go",
    "html": "HTML",
    "java": "Java",
    "javascript": "JavaScript",
    "js": "JavaScript",
    "json": "JSON",
    "markdown": "Markdown",
    "python": "Python",
    "py": "Python",
    "rust": "Rust",
    "sh": "Shell",
    "sql": "SQL",
    "toml": "TOML",
    "ts": "TypeScript",
    "typescript": "TypeScript",
    "xml": "XML",
    "yaml": "YAML",
}

DEFAULT_ADMONITION_TYPES: dict[str, str] = {
    "NOTE": "💬",
    "TIP": "💡",
    "WARNING": "⚠️",
    "CAUTION": "❗️",
    "IMPORTANT": "ℹ",
}


@dataclass
class HighlightOptions:
    """
    Options for highlighting fenced code blocks.

    :param default_language: Language identifier for code blocks that have no language.
    :param language_names: Maps a language identifier to a human-readable name, emitted as `data-code-language`.
        Grammars are loaded for these languages only.
    """

    default_language: str = field(default="text", metadata=value_option("Language for code blocks without a language identifier."))
    language_names: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_LANGUAGE_NAMES))


@dataclass
class ReferenceOptions:
    """
    Options for linking inline code to reference documentation.

    :param references: Maps the exact text of an inline code span to a destination URL.
    """

    references: dict[str, str] = field(default_factory=dict)


@dataclass
class LinkOptions:
    """
    Options for external links.

    :param rel: Value of the `rel` attribute added to external links.
    :param target: Value of the `target` attribute added to external links.
    """

    rel: str = field(default="noopener noreferrer", metadata=value_option("Relationship attribute for external links."))
    target: str = field(default="_blank", metadata=value_option("Browsing context for external links."))


@dataclass
class HeadingOptions:
    """
    Options for normalizing section headings.

    :param min_level: Headings above this level (e.g. `<h1>` when minimum is 2) are demoted to this level.
    :param max_level: Headings below this level (e.g. `<h5>` when maximum is 4) are promoted to this level.
    :param unique_ids: Whether to append a numeric suffix to identifiers of headings with the same text.
    """

    min_level: int = field(default=2, metadata=value_option("Minimum heading level."))
    max_level: int = field(default=4, metadata=value_option("Maximum heading level."))
    unique_ids: bool = field(
        default=False,
        metadata=boolean_option(
            "Disambiguate identifiers of headings with the same text with a numeric suffix.",
            "Assign the same identifier to headings with the same text.",
        ),
    )


@dataclass
class ImageOptions:
    """
    Options for rewriting relative image paths.

    :param asset_path: Root path under which images are published.
    :param default_extension: Extension assigned to images whose extension is not preserved.
    :param preserved_extensions: Extensions kept as-is.
    """

    asset_path: str = field(default="/assets", metadata=value_option("Root path for published images."))
    default_extension: str = field(default="webp", metadata=value_option("Extension for converted images."))
    preserved_extensions: list[str] = field(default_factory=lambda: ["png", "svg"])


@dataclass
class TableOptions:
    """
    Options for wrapping tables.

    :param class_name: Class assigned to the wrapper element.
    :param wrapper_tag: Tag name of the wrapper element.
    """

    class_name: str = field(default="table-wrapper", metadata=value_option("Class name of the element that wraps tables."))
    wrapper_tag: str = field(default="figure", metadata=value_option("Tag name of the element that wraps tables."))


@dataclass
class AdmonitionOptions:
    """
    Options for transforming marked block-quotes into callouts.

    :param types: Maps a recognized type keyword (e.g. `NOTE` in `[!NOTE]`) to the icon shown in the caption.
    :param container_tag: Tag name of the callout element.
    :param class_name: Class assigned to the callout element.
    :param caption_tag: Tag name of the caption element.
    """

    types: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_ADMONITION_TYPES))
    container_tag: str = "figure"
    class_name: str = "admonition"
    caption_tag: str = "figcaption"


@dataclass
class PipelineOptions:
    """
    Options for the complete pipeline.

    :param passes: Names of passes to apply, in order of application.
    :param validate: Whether to verify that the tree is well-formed after each pass.
    """

    code: HighlightOptions = field(default_factory=HighlightOptions, metadata=composite_option())
    inline_code: ReferenceOptions = field(default_factory=ReferenceOptions)
    links: LinkOptions = field(default_factory=LinkOptions, metadata=composite_option())
    headings: HeadingOptions = field(default_factory=HeadingOptions, metadata=composite_option())
    images: ImageOptions = field(default_factory=ImageOptions, metadata=composite_option())
    tables: TableOptions = field(default_factory=TableOptions, metadata=composite_option())
    admonitions: AdmonitionOptions = field(default_factory=AdmonitionOptions)
    passes: list[PassName] = field(default_factory=lambda: list(DEFAULT_PASSES))
    validate: bool = field(
        default=True,
        metadata=boolean_option(
            "Verify that the tree is well-formed after each pass.",
            "Skip verifying the tree after each pass.",
        ),
    )
