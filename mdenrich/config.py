"""
Enrich Markdown content trees for publishing.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import logging
from pathlib import Path

import yaml
from cattrs import BaseValidationError

from .environment import ArgumentError
from .options import PipelineOptions
from .serializer import JsonType, json_to_object

LOGGER = logging.getLogger(__name__)


def _read_data(path: Path) -> JsonType:
    "Reads a YAML or JSON file (JSON being a subset of YAML)."

    with open(path, "r", encoding="utf-8") as f:
        try:
            return yaml.safe_load(f)
        except yaml.YAMLError as ex:
            raise ArgumentError(f"invalid configuration file: {path}") from ex


def options_from_data(data: JsonType, source: str = "<data>") -> PipelineOptions:
    """
    Creates pipeline options from a raw JSON object, e.g. parsed from a configuration file.

    Missing keys take their default value; unknown keys are ignored.

    :raises ArgumentError: If the data is not a mapping, or holds values of the wrong type.
    """

    if data is None:
        return PipelineOptions()
    if not isinstance(data, dict):
        raise ArgumentError(f"expected: mapping of configuration options in {source}")
    try:
        return json_to_object(PipelineOptions, data)
    except (BaseValidationError, ValueError, TypeError) as ex:
        raise ArgumentError(f"invalid configuration in {source}: {ex}") from ex


def load_options(path: Path) -> PipelineOptions:
    """
    Loads pipeline options from a YAML or JSON configuration file.

    :raises ArgumentError: If the file is not valid YAML, or holds values of the wrong type.
    """

    LOGGER.info("Loading configuration from %s", path)
    return options_from_data(_read_data(path), f"file {path}")


def load_references(path: Path) -> dict[str, str]:
    """
    Loads a reference map from a YAML or JSON file that maps inline code text to a URL.

    :raises ArgumentError: If the file does not hold a mapping of strings to strings.
    """

    LOGGER.info("Loading references from %s", path)
    data = _read_data(path)
    if data is None:
        return {}
    if not isinstance(data, dict) or not all(isinstance(k, str) and isinstance(v, str) for k, v in data.items()):
        raise ArgumentError(f"expected: mapping of inline code text to URL in file {path}")
    return dict(data)
