"""Self-contained HTML page assembly for a markdown document."""

from __future__ import annotations

import html
from pathlib import Path

from markdown_it.tree import SyntaxTreeNode

from markpage_core.logging_setup import get_logger
from markpage_themes.resolver import ThemeResolver

from .assets import HIGHLIGHT_CSS, HIGHLIGHT_JS, vendor_text
from .engine import compile_html, parse_tree
from .models import RenderOptions


DEFAULT_TITLE = "Document"

MATH_ASSETS = """
<link rel="stylesheet" href="https://cdn.jsdelivr.net/npm/katex@0.16.4/dist/katex.min.css"
    integrity="sha384-vKruj+a13U8yHIkAyGgK1J3ArTLzrFGBbBc0tDp4ad/EyewESeXE/Iv67Aj8gKZ0" crossorigin="anonymous">
<script defer src="https://cdn.jsdelivr.net/npm/katex@0.16.4/dist/katex.min.js"
    integrity="sha384-PwRUT/YqbnEjkZO0zZxNqcxACrXe+j766U2amXcgMg5457rve2Y7I6ZJSm2A0mS4"
    crossorigin="anonymous"></script>
<script>
document.addEventListener("DOMContentLoaded",()=>{for(let e of document.querySelectorAll(".language-math"))katex.render(e.textContent,e,{displayMode:e.classList.contains("math-display"),throwOnError:false})});
</script>
"""

HIGHLIGHT_INIT = "<script>hljs.initHighlightingOnLoad();</script>"

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">

{highlight}
{math}

<title>{title}</title>

<style>
{style}
</style>
</head>

<body>
{body}
</body>
</html>
"""

logger = get_logger("renderer")

_TEXT_NODES = ("text", "code_inline", "math_inline", "math_inline_double", "html_inline")


def _text_content(node: SyntaxTreeNode) -> str:
    if node.type in _TEXT_NODES:
        return node.content
    if node.type == "softbreak":
        return "\n"
    if node.type == "hardbreak":
        return ""
    return "".join(_text_content(child) for child in node.children)


def _title_from_node(node: SyntaxTreeNode) -> str | None:
    if node.type == "heading":
        return _text_content(node)
    # Only the first child is followed; later siblings are never searched.
    if not node.children:
        return None
    return _title_from_node(node.children[0])


def _first_source_line(text: str) -> int | None:
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    for index, line in enumerate(lines):
        if line.strip(" \t"):
            return index
    return None


def _leads_document(tree: SyntaxTreeNode, text: str) -> bool:
    """Whether the root's first child starts at the first non-blank line.

    Link reference definitions leave no node behind and footnote definitions
    are moved to the end, so either one ahead of the first block shifts it.
    """
    if not tree.children:
        return False
    first = tree.children[0]
    return first.map is not None and first.map[0] == _first_source_line(text)


def _highlight_region() -> str:
    return "\n".join(
        (
            f"<style>{vendor_text(HIGHLIGHT_CSS)}</style>",
            f"<script>{vendor_text(HIGHLIGHT_JS)}</script>",
            HIGHLIGHT_INIT,
        )
    )


class Document:
    """Raw markdown text plus title extraction and page rendering."""

    def __init__(self, text: str) -> None:
        self._text = text

    @classmethod
    def from_path(cls, path: Path) -> Document:
        return cls(path.read_text(encoding="utf-8"))

    @property
    def text(self) -> str:
        return self._text

    def title(self) -> str | None:
        try:
            tree = parse_tree(self._text)
        except Exception:
            logger.debug("title parse failed", exc_info=True, extra={"event": "title_parse_failed"})
            return None
        if not _leads_document(tree, self._text):
            return None
        return _title_from_node(tree)

    def render(self, options: RenderOptions, resolver: ThemeResolver | None = None) -> str:
        resolver = resolver or ThemeResolver()

        body = compile_html(self._text, math=options.math)
        style = resolver.resolve(options.theme)
        title = self.title() or DEFAULT_TITLE

        logger.debug(
            "rendered document theme=%s highlight=%s math=%s",
            options.theme.name,
            options.highlight,
            options.math,
            extra={"event": "document_rendered"},
        )
        return PAGE_TEMPLATE.format(
            highlight=_highlight_region() if options.highlight else "",
            math=MATH_ASSETS if options.math else "",
            title=html.escape(title, quote=False),
            style=style,
            body=body,
        )
