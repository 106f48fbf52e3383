"""Markdown engine configuration: GFM constructs with optional dollar math."""

from __future__ import annotations

from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml
from markdown_it.tree import SyntaxTreeNode
from mdit_py_plugins.dollarmath import dollarmath_plugin
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

from markpage_core.errors import MarkdownCompileError


def _render_math_inline(self, tokens, idx, options, env) -> str:
    content = escapeHtml(tokens[idx].content.strip())
    return f'<code class="language-math math-inline">{content}</code>'


def _render_math_block(self, tokens, idx, options, env) -> str:
    content = escapeHtml(tokens[idx].content.strip("\n"))
    return f'<pre><code class="language-math math-display">{content}</code></pre>\n'


def build_markdown(math: bool = False) -> MarkdownIt:
    """Build a parser with raw HTML passthrough, footnotes and task lists.

    Link reference definitions are part of the CommonMark core and always on.
    """
    md = MarkdownIt("gfm-like", {"html": True})
    md.use(footnote_plugin)
    md.use(tasklists_plugin)

    if math:
        md.use(dollarmath_plugin, allow_labels=False, double_inline=True)
        md.add_render_rule("math_inline", _render_math_inline)
        md.add_render_rule("math_inline_double", _render_math_inline)
        md.add_render_rule("math_block", _render_math_block)
    return md


def compile_html(text: str, math: bool = False) -> str:
    try:
        return build_markdown(math).render(text)
    except Exception as exc:
        raise MarkdownCompileError(f"failed to compile markdown: {exc}") from exc


def parse_tree(text: str, math: bool = False) -> SyntaxTreeNode:
    md = build_markdown(math)
    return SyntaxTreeNode(md.parse(text))
