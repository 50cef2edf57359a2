"""
Enrich Markdown content trees for publishing.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import unittest
from argparse import ArgumentParser
from dataclasses import dataclass, field
from io import StringIO
from typing import Literal

from mdenrich.clio import add_arguments, boolean_option, composite_option, get_options, value_option
from mdenrich.options import HeadingOptions, PipelineOptions


@dataclass
class CompositeOption:
    int_val: int = field(default=12, metadata=value_option("Help text for integer option."))
    optional_int_val: int | None = field(default=None, metadata=value_option("Help text for integer option."))
    str_val: str = field(default="string", metadata=value_option("Help text for string option."))
    literal_val: Literal["one", "two", "three"] = field(
        default="two",
        metadata=value_option("Help text for choice option."),
    )
    untracked_val: str = "untracked"


@dataclass
class Options:
    bool_flag: bool = field(
        default=False,
        metadata=boolean_option(
            "Help text for the case when flag is enabled.",
            "Help text for the case when flag is disabled.",
        ),
    )
    skip_step: bool = field(
        default=False,
        metadata=boolean_option(
            "Help text for the case when step is skipped.",
            "Help text for the case when step is kept.",
        ),
    )
    untracked_value: str = "untracked"
    untracked_class: CompositeOption = field(default_factory=CompositeOption)


@dataclass
class NestedOptions(Options):
    nested: CompositeOption = field(default_factory=CompositeOption, metadata=composite_option())


@dataclass
class FlatOptions(Options):
    flat: CompositeOption = field(default_factory=CompositeOption, metadata=composite_option(flatten=True))


def get_help(parser: ArgumentParser) -> str:
    s = StringIO()
    parser.print_help(file=s)
    return s.getvalue()


class TestCommandLine(unittest.TestCase):
    def test_hierarchical(self) -> None:
        parser = ArgumentParser()
        add_arguments(parser, NestedOptions)

        text = get_help(parser)
        self.assertIn("usage:", text)
        self.assertIn("options:", text)
        self.assertIn("--bool-flag", text)
        self.assertIn("--no-bool-flag", text)
        self.assertIn("--skip-step", text)
        self.assertIn("--keep-step", text)
        self.assertIn("--nested-int-val INT", text)

        args = parser.parse_args(["--nested-int-val=23", "--nested-optional-int-val=45", "--nested-str-val=text", "--nested-literal-val=three", "--bool-flag"])
        options = get_options(args, NestedOptions)

        self.assertTrue(options.bool_flag)
        self.assertFalse(options.skip_step)
        self.assertEqual(options.nested.int_val, 23)
        self.assertEqual(options.nested.optional_int_val, 45)
        self.assertEqual(options.nested.str_val, "text")
        self.assertEqual(options.nested.literal_val, "three")
        self.assertEqual(options.nested.untracked_val, "untracked")

    def test_flat(self) -> None:
        parser = ArgumentParser()
        add_arguments(parser, FlatOptions)

        text = get_help(parser)
        self.assertIn("--bool-flag", text)
        self.assertIn("--no-bool-flag", text)
        self.assertIn("--int-val INT", text)

        args = parser.parse_args(["--int-val=23", "--optional-int-val=45", "--str-val=text", "--literal-val=three", "--skip-step"])
        options = get_options(args, FlatOptions)

        self.assertFalse(options.bool_flag)
        self.assertTrue(options.skip_step)
        self.assertEqual(options.flat.int_val, 23)
        self.assertEqual(options.flat.optional_int_val, 45)
        self.assertEqual(options.flat.str_val, "text")
        self.assertEqual(options.flat.literal_val, "three")
        self.assertEqual(options.flat.untracked_val, "untracked")

    def test_defaults(self) -> None:
        defaults = PipelineOptions(headings=HeadingOptions(min_level=1, unique_ids=True), passes=["headings"])

        parser = ArgumentParser()
        add_arguments(parser, PipelineOptions, defaults)
        self.assertIn("--headings-min-level INT", get_help(parser))

        # values on the command line take precedence over defaults
        args = parser.parse_args(["--headings-max-level=3"])
        options = get_options(args, PipelineOptions, defaults)
        self.assertEqual(options.headings.min_level, 1)
        self.assertEqual(options.headings.max_level, 3)
        self.assertTrue(options.headings.unique_ids)

        # fields not exposed on the command line keep their value
        self.assertListEqual(options.passes, ["headings"])

        args = parser.parse_args(["--headings-no-unique-ids", "--no-validate"])
        options = get_options(args, PipelineOptions, defaults)
        self.assertFalse(options.headings.unique_ids)
        self.assertFalse(options.validate)


if __name__ == "__main__":
    unittest.main()
