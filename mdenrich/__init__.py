"""
Enrich Markdown content trees for publishing.

Transforms the element tree of a rendered Markdown document with a pipeline of passes that highlight code, link inline
code to references, safeguard external links, normalize headings, rewrite image paths, wrap tables and build callouts.
"""

from ._version import __version__

__all__ = ["__version__"]

__author__ = "Levente Hunyadi"
__copyright__ = "Copyright 2022-2026, Levente Hunyadi"
__license__ = "MIT"
__maintainer__ = "Levente Hunyadi"
__status__ = "Production"
