"""
Enrich Markdown content trees for publishing.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import json
import logging
import shutil
import tempfile
import unittest
from contextlib import redirect_stdout
from io import StringIO
from pathlib import Path

from mdenrich.__main__ import get_help, main
from mdenrich.document import EnrichedDocument
from mdenrich.options import HeadingOptions, PipelineOptions
from mdenrich.pipeline import Pipeline
from tests.utility import TypedTestCase

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(funcName)s [%(lineno)d] - %(message)s",
)


class TestDocument(TypedTestCase):
    def setUp(self) -> None:
        self.tmp_dir = Path(tempfile.mkdtemp())

    def tearDown(self) -> None:
        shutil.rmtree(self.tmp_dir)

    def write(self, relative_path: str, content: str) -> Path:
        path = self.tmp_dir / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return path

    def read(self, relative_path: str) -> str:
        with open(self.tmp_dir / relative_path, "r", encoding="utf-8") as f:
            return f.read()

    def test_title(self) -> None:
        document = EnrichedDocument.from_markdown("# Title\n\n## Section\n\nText.\n")
        self.assertEqual(document.title, "Title")
        self.assertEqual([entry.identifier for entry in document.toc], ["title"])

        document = EnrichedDocument.from_markdown("---\ntitle: Front matter\nsummary: ignored\n---\n# Title\n")
        self.assertEqual(document.title, "Front matter")
        self.assertNotIn("title:", document.html())

        document = EnrichedDocument.from_markdown("## One\n\n## Two\n")
        self.assertIsNone(document.title)

    def test_pipeline(self) -> None:
        pipeline = Pipeline.create(PipelineOptions(headings=HeadingOptions(min_level=1), passes=["headings"]))
        document = EnrichedDocument.from_markdown("# Title\n\n| A |\n|---|\n| 1 |\n", pipeline)
        self.assertIn('<h1><a href="#title" id="title">Title</a></h1>', document.html())
        self.assertNotIn("table-wrapper", document.html())

        document = EnrichedDocument.from_markdown("# Title\n", Pipeline.create(PipelineOptions(passes=[])))
        self.assertIsNone(document.title)
        self.assertListEqual(document.toc, [])

    def test_create(self) -> None:
        document = EnrichedDocument.create(self.write("doc.md", "# Markdown\n"))
        self.assertEqual(document.title, "Markdown")

        document = EnrichedDocument.create(self.write("doc.html", "<h1>HTML</h1><table></table>"))
        self.assertEqual(document.title, "HTML")
        self.assertEqual(
            document.html(),
            '<h2><a href="#html" id="html">HTML</a></h2><figure class="table-wrapper"><table></table></figure>',
        )

    def test_help(self) -> None:
        text = get_help()
        self.assertIn("--config", text)
        self.assertIn("--headings-min-level", text)
        self.assertIn("--no-validate", text)

    def test_cli_file(self) -> None:
        source = self.write("index.md", "# Title\n\n![Photo](./photo.jpg)\n")
        main([str(source), "--headings-min-level=1", "--images-asset-path=/static", "--loglevel=warning"])

        html = self.read("index.html")
        self.assertIn('<h1><a href="#title" id="title">Title</a></h1>', html)
        self.assertIn('src="/static/photo.webp"', html)

    def test_cli_directory(self) -> None:
        self.write("docs/index.md", "# Index\n\nSee `foo`.\n")
        self.write("docs/guide/intro.md", "# Intro\n")
        self.write("references.yaml", "foo: /api/foo\n")
        self.write("config.yaml", "tables:\n  wrapper_tag: div\nheadings:\n  max_level: 3\n")

        main(
            [
                str(self.tmp_dir / "docs"),
                "-o",
                str(self.tmp_dir / "site"),
                "--config",
                str(self.tmp_dir / "config.yaml"),
                "--references",
                str(self.tmp_dir / "references.yaml"),
            ]
        )

        self.assertIn('<a href="/api/foo" data-code-reference="true">', self.read("site/index.html"))
        self.assertIn('<h2><a href="#intro" id="intro">Intro</a></h2>', self.read("site/guide/intro.html"))

    def test_cli_dump_config(self) -> None:
        self.write("config.yaml", "headings:\n  max_level: 3\n")
        with redirect_stdout(StringIO()) as buf:
            main(["--config", str(self.tmp_dir / "config.yaml"), "--headings-min-level=1", "--dump-config"])

        data = json.loads(buf.getvalue())
        self.assertEqual(data["headings"]["min_level"], 1)
        self.assertEqual(data["headings"]["max_level"], 3)
        self.assertEqual(data["tables"]["wrapper_tag"], "figure")

    def test_cli_errors(self) -> None:
        with self.assertRaises(SystemExit) as cm:
            main([])
        self.assertEqual(cm.exception.code, 2)

        with redirect_stdout(StringIO()):
            with self.assertRaises(SystemExit):
                main([str(self.tmp_dir / "missing.md")])

        self.write("bad.yaml", "passes: [bogus]\n")
        with self.assertRaises(SystemExit):
            main([str(self.tmp_dir), "--config", str(self.tmp_dir / "bad.yaml")])

        source = self.write("page.html", "<p>text</p>")
        with self.assertRaises(SystemExit):
            main([str(source)])


if __name__ == "__main__":
    unittest.main()
