"""
Enrich Markdown content trees for publishing.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import tempfile
import unittest
from pathlib import Path

from mdenrich.config import load_options, load_references, options_from_data
from mdenrich.environment import ArgumentError
from mdenrich.frontmatter import DocumentProperties, extract_frontmatter_json, extract_frontmatter_object
from mdenrich.options import DEFAULT_PASSES, PipelineOptions
from mdenrich.serializer import object_to_json
from tests.utility import TypedTestCase


class TestConfiguration(TypedTestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp_dir = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def write(self, name: str, content: str) -> Path:
        path = self.tmp_dir / name
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return path

    def test_yaml(self) -> None:
        path = self.write(
            "config.yaml",
            "passes: [headings, tables]\n"
            "headings:\n"
            "  min_level: 1\n"
            "  unique_ids: true\n"
            "tables:\n"
            "  class_name: scroll\n"
            "code:\n"
            "  language_names:\n"
            "    python: Python 3\n"
            "unknown_key: ignored\n",
        )
        options = load_options(path)
        self.assertListEqual(options.passes, ["headings", "tables"])
        self.assertEqual(options.headings.min_level, 1)
        self.assertEqual(options.headings.max_level, 4)
        self.assertTrue(options.headings.unique_ids)
        self.assertEqual(options.tables.class_name, "scroll")
        self.assertEqual(options.tables.wrapper_tag, "figure")
        self.assertEqual(options.code.language_names, {"python": "Python 3"})

    def test_json(self) -> None:
        path = self.write("config.json", '{"images": {"asset_path": "/static"}, "validate": false}')
        options = load_options(path)
        self.assertEqual(options.images.asset_path, "/static")
        self.assertFalse(options.validate)

    def test_empty(self) -> None:
        options = load_options(self.write("empty.yaml", ""))
        self.assertEqual(options, PipelineOptions())
        self.assertListEqual(options.passes, DEFAULT_PASSES)

    def test_invalid(self) -> None:
        with self.assertRaises(ArgumentError):
            load_options(self.write("passes.yaml", "passes: [headings, bogus]\n"))
        with self.assertRaises(ArgumentError):
            load_options(self.write("type.yaml", "headings:\n  min_level: many\n"))
        with self.assertRaises(ArgumentError):
            load_options(self.write("list.yaml", "- headings\n- tables\n"))
        with self.assertRaises(ArgumentError):
            load_options(self.write("syntax.yaml", "headings: [unclosed\n"))

    def test_data(self) -> None:
        options = PipelineOptions()
        self.assertEqual(options_from_data(object_to_json(options)), options)
        self.assertEqual(options_from_data(None), options)

    def test_references(self) -> None:
        path = self.write("references.yaml", '"Pipeline.run": /docs/pipeline#run\nfoo: https://example.com/foo\n')
        self.assertEqual(load_references(path), {"Pipeline.run": "/docs/pipeline#run", "foo": "https://example.com/foo"})
        self.assertEqual(load_references(self.write("none.yaml", "")), {})

        with self.assertRaises(ArgumentError):
            load_references(self.write("bad.yaml", "foo: [1, 2]\n"))

    def test_missing(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_options(self.tmp_dir / "missing.yaml")


class TestFrontMatter(TypedTestCase):
    def test_properties(self) -> None:
        text = "---\ntitle: My Title\ntags: [one, two]\nauthor: ignored\n---\n# Heading\n"
        properties, remainder = extract_frontmatter_object(DocumentProperties, text)
        self.assertEqual(properties, DocumentProperties(title="My Title"))
        self.assertEqual(remainder, "# Heading\n")

    def test_json(self) -> None:
        data, remainder = extract_frontmatter_json("---\ntitle: Title\nsummary: Summary\n---\nText\n")
        self.assertEqual(data, {"title": "Title", "summary": "Summary"})
        self.assertEqual(remainder, "Text\n")

    def test_missing(self) -> None:
        text = "# Heading\n\n---\n\nText\n"
        properties, remainder = extract_frontmatter_object(DocumentProperties, text)
        self.assertIsNone(properties)
        self.assertEqual(remainder, text)

    def test_not_mapping(self) -> None:
        properties, remainder = extract_frontmatter_object(DocumentProperties, "---\n- one\n- two\n---\nText\n")
        self.assertIsNone(properties)
        self.assertEqual(remainder, "Text\n")


if __name__ == "__main__":
    unittest.main()
