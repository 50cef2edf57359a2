"""
Enrich Markdown content trees for publishing.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""


class ArgumentError(ValueError):
    "Raised when wrong arguments are passed to a function call."


class UnknownLanguageError(LookupError):
    "Raised when source code is to be highlighted in a language that has no registered grammar."

    language: str

    def __init__(self, language: str) -> None:
        super().__init__(f"no grammar registered for language: {language}")
        self.language = language


class MalformedNodeError(ValueError):
    "Raised when a node does not have the shape a transformation expects. Passes recover by leaving the node as-is."


class StructuralError(RuntimeError):
    "Raised when a tree is no longer a well-formed tree, e.g. a node is shared between parents."


class ConversionError(RuntimeError):
    "Raised when a document cannot be converted into an enriched tree."
