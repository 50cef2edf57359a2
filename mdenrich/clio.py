"""
Enrich Markdown content trees for publishing.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import dataclasses
from argparse import ArgumentParser, Namespace
from dataclasses import MISSING, Field, dataclass, fields, is_dataclass
from types import NoneType, UnionType
from typing import Any, Literal, LiteralString, TypeVar, cast, get_args, get_origin

T = TypeVar("T")

_METADATA_KEY = "argument"


@dataclass
class BooleanOption:
    true_text: LiteralString
    false_text: LiteralString


@dataclass
class ValueOption:
    text: LiteralString


@dataclass
class CompositeOption:
    flatten: bool = False


def boolean_option(true_text: LiteralString, false_text: LiteralString) -> dict[str, Any]:
    "Identifies a command-line argument as a boolean (on/off) flag."

    return {_METADATA_KEY: BooleanOption(true_text, false_text)}


def value_option(text: LiteralString) -> dict[str, Any]:
    "Identifies a command-line argument as an option that assigns a value."

    return {_METADATA_KEY: ValueOption(text)}


def composite_option(*, flatten: bool = False) -> dict[str, Any]:
    """
    Identifies a command-line argument as a data-class that needs to be unnested.

    :param flatten: Whether to omit the field name as a prefix of nested argument names.
    """

    return {_METADATA_KEY: CompositeOption(flatten)}


def _get_metadata(field: Field[Any]) -> BooleanOption | ValueOption | CompositeOption | None:
    return field.metadata.get(_METADATA_KEY)


def _default_of(field: Field[Any], defaults: Any) -> Any:
    if defaults is not None:
        return getattr(defaults, field.name)
    if field.default is not MISSING:
        return field.default
    if field.default_factory is not MISSING:
        return field.default_factory()
    return None


class _ArgumentBuilder:
    "Adds arguments to a command-line argument parser by recursively visiting fields of a data-class."

    parser: ArgumentParser
    arg_prefixes: list[str]
    dest_prefixes: list[str]

    def __init__(self, parser: ArgumentParser) -> None:
        self.parser = parser
        self.arg_prefixes = []
        self.dest_prefixes = []

    def _arg_name(self, name: str) -> str:
        return "--" + "-".join([*self.arg_prefixes, name.replace("_", "-")])

    def _dest(self, name: str) -> str:
        return "_".join([*self.dest_prefixes, name])

    def _add_flag(self, field: Field[Any], option: BooleanOption, default: bool) -> None:
        name = field.name.replace("_", "-")
        if name.startswith("skip-"):
            inverse_name = "keep-" + name.removeprefix("skip-")
        elif name.startswith("keep-"):
            inverse_name = "skip-" + name.removeprefix("keep-")
        else:
            inverse_name = f"no-{name}"

        self.parser.add_argument(
            self._arg_name(field.name),
            dest=self._dest(field.name),
            action="store_true",
            default=default,
            help=option.true_text + (" (default)" if default is True else ""),
        )
        self.parser.add_argument(
            self._arg_name(inverse_name),
            dest=self._dest(field.name),
            action="store_false",
            help=option.false_text + (" (default)" if default is False else ""),
        )

    def _add_value(self, field: Field[Any], option: ValueOption, default: Any) -> None:
        help_text = option.text
        if default is not None:
            help_text += f" (default: {default!s})"

        field_type: Any = field.type
        if get_origin(field_type) is UnionType:
            union_types = [t for t in get_args(field_type) if t is not NoneType]
            if len(union_types) != 1:
                raise TypeError(f"expected: `T` or `T | None` as argument type; got: {field.type}")
            field_type = union_types[0]

        if get_origin(field_type) is Literal:
            self.parser.add_argument(
                self._arg_name(field.name),
                dest=self._dest(field.name),
                choices=get_args(field_type),
                default=default,
                help=help_text,
            )
        elif isinstance(field_type, type):
            self.parser.add_argument(
                self._arg_name(field.name),
                dest=self._dest(field.name),
                type=field_type,
                default=default,
                help=help_text,
                metavar=field_type.__name__.upper(),
            )
        else:
            raise TypeError(f"expected: known argument type; got: {field.type}")

    def add_arguments(self, options_type: type[Any], defaults: Any = None) -> None:
        for field in fields(options_type):
            option = _get_metadata(field)
            if option is None:
                continue

            default = _default_of(field, defaults)
            if isinstance(option, BooleanOption):
                self._add_flag(field, option, bool(default))
            elif isinstance(option, ValueOption):
                self._add_value(field, option, default)
            elif isinstance(option, CompositeOption):
                if not isinstance(field.type, type) or not is_dataclass(field.type):
                    raise TypeError(f"expected: data-class for composite option; got: {field.type}")
                if not option.flatten:
                    self.arg_prefixes.append(field.name.replace("_", "-"))
                self.dest_prefixes.append(field.name)
                self.add_arguments(field.type, default)
                self.dest_prefixes.pop()
                if not option.flatten:
                    self.arg_prefixes.pop()


def add_arguments(parser: ArgumentParser, options_type: type[Any], defaults: Any = None) -> None:
    """
    Adds arguments to a command-line argument parser.

    :param parser: A command-line argument parser.
    :param options_type: A data-class type that encapsulates configuration options.
    :param defaults: An instance of the data-class whose values act as argument defaults (e.g. read from a file).
    """

    if not is_dataclass(options_type):
        raise TypeError(f"expected: data-class as argument source; got: {type(options_type).__name__}")
    _ArgumentBuilder(parser).add_arguments(options_type, defaults)


def _get_options(args: Namespace, options_type: type[T], base: T | None, prefixes: tuple[str, ...]) -> T:
    params: dict[str, Any] = {}
    for field in fields(cast(Any, options_type)):
        field_prefixes = (*prefixes, field.name)
        option = _get_metadata(field)
        if isinstance(option, CompositeOption) and isinstance(field.type, type):
            nested_base = getattr(base, field.name) if base is not None else None
            params[field.name] = _get_options(args, field.type, nested_base, field_prefixes)
        elif option is not None:
            value = getattr(args, "_".join(field_prefixes), MISSING)
            if value is not MISSING:
                params[field.name] = value

    if base is not None:
        return cast(T, dataclasses.replace(cast(Any, base), **params))
    return options_type(**params)


def get_options(args: Namespace, options_type: type[T], base: T | None = None) -> T:
    """
    Extracts configuration options from command-line arguments acquired by an argument parser.

    :param args: Arguments acquired by a command-line argument parser.
    :param options_type: A data-class type that encapsulates configuration options.
    :param base: Options to start from; fields not exposed on the command line keep their value from this instance.
    :returns: Configuration options as a data-class instance.
    """

    if not is_dataclass(options_type):
        raise TypeError(f"expected: data-class as argument target; got: {type(options_type).__name__}")
    return _get_options(args, options_type, base, ())
