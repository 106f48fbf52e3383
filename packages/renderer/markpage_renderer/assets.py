"""Vendored highlighter assets shipped inside the package."""

from __future__ import annotations

from functools import lru_cache
from importlib import resources


HIGHLIGHT_CSS = "highlight/highlight.min.css"
HIGHLIGHT_JS = "highlight/highlight.min.js"


@lru_cache(maxsize=None)
def vendor_text(relative_path: str) -> str:
    node = resources.files(__package__) / "vendor"
    for part in relative_path.split("/"):
        node = node / part
    return node.read_text(encoding="utf-8")
