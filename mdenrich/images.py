"""
Enrich Markdown content trees for publishing.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import logging
from typing import Optional, Sequence
from urllib.parse import urlparse

from typing_extensions import override

from .nodes import Element, Node
from .options import ImageOptions
from .visitor import NodeVisitor

LOGGER = logging.getLogger(__name__)


def is_absolute_url(url: str) -> bool:
    urlparts = urlparse(url)
    return bool(urlparts.scheme) or bool(urlparts.netloc)


def rewrite_image_path(src: str, options: ImageOptions) -> str:
    """
    Maps a relative image path to a path under the asset root, normalizing the image extension.

    `./a/b/photo.jpg` becomes `/assets/a/b/photo.webp` and `./a/b/icon.svg` becomes `/assets/a/b/icon.svg` with
    default options.
    """

    segments = src.split("/")
    path = options.asset_path.rstrip("/")
    for index, segment in enumerate(segments):
        # skip the `.` segment that relative paths in Markdown start with
        if segment == ".":
            continue

        if index == len(segments) - 1:
            stem, dot, extension = segment.rpartition(".")
            if not dot:
                stem, extension = segment, ""
            if extension not in options.preserved_extensions:
                extension = options.default_extension
            path = f"{path}/{stem}.{extension}"
        else:
            path = f"{path}/{segment}"

    return path


class ImagePathRewriter(NodeVisitor):
    """
    Rewrites the source of images with a relative path such that the image is served from the asset root.

    Absolute URLs and root-relative paths (e.g. an image path that has already been rewritten) are left as-is.
    """

    options: ImageOptions

    def __init__(self, options: ImageOptions | None = None) -> None:
        self.options = options or ImageOptions()

    @override
    def matches(self, node: Node) -> bool:
        return isinstance(node, Element) and node.tag == "img"

    @override
    def transform(self, node: Node, ancestors: Sequence[Element]) -> Optional[Node]:
        if not isinstance(node, Element):
            return None

        src = node.get("src")
        if not isinstance(src, str) or not src:
            return None

        if is_absolute_url(src) or src.startswith("/"):
            LOGGER.debug("Image with absolute URL or path left intact: %s", src)
            return None

        target = rewrite_image_path(src, self.options)
        LOGGER.debug("Rewriting image path %s to %s", src, target)
        node.properties["src"] = target
        return None
