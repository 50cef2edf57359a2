"""
Enrich Markdown content trees for publishing.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import re
import typing
from dataclasses import dataclass
from typing import TypeVar

import yaml

from .serializer import JsonType, json_to_object

D = TypeVar("D")


def extract_value(expr: re.Pattern[str], text: str) -> tuple[str | None, str]:
    """
    Extracts the value captured by the first group in a regular expression.

    :returns: A tuple of (1) the value extracted and (2) remaining text without the captured text.
    """

    if expr.groups != 1:
        raise ValueError("expected: a single group whose value to extract")

    m = expr.search(text)
    if m is None:
        return None, text
    return m.group(1), text[: m.start()] + text[m.end() :]


@dataclass
class DocumentProperties:
    """
    Properties of a Markdown document set in its front-matter.

    :param title: Document title, overrides the title inferred from the unique top-level heading.
    """

    title: str | None = None


_FRONT_MATTER_REGEXP = re.compile(r"\A---\n(.+?)^---\n", flags=re.DOTALL | re.MULTILINE)


def extract_frontmatter_json(text: str) -> tuple[dict[str, JsonType] | None, str]:
    "Extracts the YAML front-matter from a Markdown document into a JSON object."

    block, text = extract_value(_FRONT_MATTER_REGEXP, text)

    data: dict[str, JsonType] | None = None
    if block is not None:
        value = yaml.safe_load(block)
        if isinstance(value, dict):
            data = typing.cast(dict[str, JsonType], value)

    return data, text


def extract_frontmatter_object(tp: type[D], text: str) -> tuple[D | None, str]:
    data, text = extract_frontmatter_json(text)

    value_object: D | None = None
    if data is not None:
        value_object = json_to_object(tp, data)

    return value_object, text
