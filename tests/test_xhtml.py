"""
Enrich Markdown content trees for publishing.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import logging
import unittest

from mdenrich.nodes import CodeBlock, E, Element, Raw, Text
from mdenrich.xhtml import tree_from_html, tree_to_html
from tests.utility import TypedTestCase

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(funcName)s [%(lineno)d] - %(message)s",
)


class TestParse(TypedTestCase):
    def test_elements(self) -> None:
        self.assertEqual(tree_from_html("<p>Hello <em>world</em>!</p>"), E.root(E.p("Hello ", E.em("world"), "!")))
        self.assertEqual(tree_from_html("lead <b>bold</b> tail"), E.root("lead ", E.b("bold"), " tail"))

    def test_attributes(self) -> None:
        tree = tree_from_html('<p><a href="/path" class="one two">link</a></p>')
        self.assertEqual(tree, E.root(E.p(Element("a", {"href": "/path", "class": ["one", "two"]}, [Text("link")]))))

    def test_comments(self) -> None:
        self.assertEqual(tree_from_html("<p>one<!-- comment --> two</p>"), E.root(E.p("one two")))

    def test_entities(self) -> None:
        self.assertEqual(tree_from_html("<p>a &lt; b &amp;&amp; c</p>"), E.root(E.p("a < b && c")))

    def test_code_block(self) -> None:
        tree = tree_from_html('<pre><code class="language-python" data-meta="[main.py]">if a &lt; b:\n    pass\n</code></pre>')
        self.assertEqual(tree, E.root(CodeBlock("if a < b:\n    pass\n", "python", "[main.py]")))

        tree = tree_from_html("<pre><code>plain\n</code></pre>")
        self.assertEqual(tree, E.root(CodeBlock("plain\n")))

        # preformatted text that is not a code block
        tree = tree_from_html('<pre class="language-python"><span class="k">def</span> f</pre>')
        self.assertEqual(tree, E.root(E.pre({"class": "language-python"}, E.span({"class": "k"}, "def"), " f")))

    def test_empty(self) -> None:
        self.assertEqual(tree_from_html(""), E.root())


class TestSerialize(TypedTestCase):
    def test_elements(self) -> None:
        self.assertEqual(tree_to_html(E.root(E.p("Hello ", E.em("world"), "!"))), "<p>Hello <em>world</em>!</p>")
        self.assertEqual(tree_to_html(E.root("lead ", E.b("bold"), " tail")), "lead <b>bold</b> tail")
        self.assertEqual(tree_to_html(E.root(E.p("a < b & c"))), "<p>a &lt; b &amp; c</p>")
        self.assertEqual(tree_to_html(E.p("not a root")), "<p>not a root</p>")

    def test_properties(self) -> None:
        tree = E.root(E.p({"class": ["one", "two"], "translate": "no"}, "text"))
        self.assertEqual(tree_to_html(tree), '<p class="one two" translate="no">text</p>')

        tree = E.root(Element("input", {"disabled": True, "hidden": False}))
        self.assertEqual(tree_to_html(tree), "<input disabled>")

    def test_raw(self) -> None:
        tree = E.root(E.pre({"translate": "no"}, Raw('<span class="k">def</span> f(a, b=&quot;&quot;)')))
        self.assertEqual(tree_to_html(tree), '<pre translate="no"><span class="k">def</span> f(a, b=&quot;&quot;)</pre>')

        tree = E.root(Raw("<hr>"), E.p("text"), Raw("tail"))
        self.assertEqual(tree_to_html(tree), "<hr><p>text</p>tail")

    def test_private_use_text(self) -> None:
        html = "<p>\ue0000\ue001 and \ue0007\ue001</p>"
        self.assertEqual(tree_to_html(tree_from_html(html)), html)

        tree = E.root(E.p("\ue0000\ue001"), E.pre(Raw("<b>bold</b>")))
        self.assertEqual(tree_to_html(tree), "<p>\ue0000\ue001</p><pre><b>bold</b></pre>")

    def test_code_block(self) -> None:
        tree = E.root(CodeBlock("x < 1\n", "python", "[main.py]"))
        self.assertEqual(tree_to_html(tree), '<pre><code class="language-python" data-meta="[main.py]">x &lt; 1\n</code></pre>')

    def test_round_trip(self) -> None:
        html = '<h2><a href="#title" id="title">Title</a></h2><p>Text with <code>code</code>.</p>'
        self.assertEqual(tree_to_html(tree_from_html(html)), html)


if __name__ == "__main__":
    unittest.main()
