"""Renderer package: markdown documents to self-contained HTML pages."""

from .assets import HIGHLIGHT_CSS, HIGHLIGHT_JS, vendor_text
from .document import DEFAULT_TITLE, Document
from .engine import build_markdown, compile_html, parse_tree
from .models import RenderOptions

__all__ = [
    "DEFAULT_TITLE",
    "Document",
    "HIGHLIGHT_CSS",
    "HIGHLIGHT_JS",
    "RenderOptions",
    "build_markdown",
    "compile_html",
    "parse_tree",
    "vendor_text",
]
