"""Content rendering for Quill.

This module turns the markdown body of a post into display HTML.

Key functions and classes:
- strip_leading_heading: Drops a duplicate title heading at the top of a body.
- MarkdownRenderer: Renders markdown to HTML with mistune.
- ContentTransformer: Runs both steps and returns the cleaned markdown and HTML.

Code blocks keep their language as a ``language-xxx`` class on the
``<code>`` element; highlighting happens downstream in the browser.
"""

from __future__ import annotations

import re

import mistune

MARKDOWN_PLUGINS = ["strikethrough", "footnotes", "table", "url", "task_lists", "def_list"]


def strip_leading_heading(markdown: str) -> str:
    """Remove a level-1 heading if it is the first non-blank line.

    The title of a post is displayed from its metadata, so an opening
    ``# Title`` line would show it twice. Only the first non-blank line is
    considered; headings further down are part of the body and are kept.
    Leading blank lines are preserved.

    Args:
        markdown: Markdown body text.

    Returns:
        The body with the opening heading removed, otherwise unchanged.

    Examples:
        >>> strip_leading_heading("# Title\\n\\nBody")
        '\\nBody'
    """
    lines = markdown.split("\n")
    for index, line in enumerate(lines):
        stripped = line.strip()
        if not stripped:
            continue
        if stripped.startswith("# "):
            return "\n".join(lines[:index] + lines[index + 1 :])
        break
    return markdown


def _generate_heading_id(text: str) -> str:
    """Generate a URL-friendly ID from heading text.

    Args:
        text: The heading text.

    Returns:
        URL-friendly slug suitable for anchor links.
    """
    slug = re.sub(r"<[^>]+>", "", text).lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[-\s]+", "-", slug)
    return slug.strip("-")


class _PostHTMLRenderer(mistune.HTMLRenderer):
    """HTML renderer adding heading anchors and language-tagged code blocks."""

    def __init__(self):
        super().__init__(escape=False)
        self._heading_id_counts: dict[str, int] = {}

    def heading(self, text: str, level: int, **attrs) -> str:
        """Render a heading with an auto-generated, de-duplicated ID."""
        base_id = _generate_heading_id(text) or "section"

        if base_id in self._heading_id_counts:
            self._heading_id_counts[base_id] += 1
            heading_id = f"{base_id}-{self._heading_id_counts[base_id]}"
        else:
            self._heading_id_counts[base_id] = 0
            heading_id = base_id

        return f'<h{level} id="{heading_id}">{text}</h{level}>\n'

    def block_code(self, code: str, info: str | None = None) -> str:
        """Render a code block, keeping the language annotation as a class.

        Args:
            code: The code content.
            info: Fence info string; its first word is the language.

        Returns:
            HTML ``<pre><code>`` block with the code escaped.
        """
        escaped = code.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
        language = info.split()[0] if info and info.strip() else ""
        lang_class = f' class="language-{mistune.escape(language)}"' if language else ""
        return f"<pre><code{lang_class}>{escaped}</code></pre>\n"


class MarkdownRenderer:
    """Renders markdown content to HTML.

    Tables, fenced code, strikethrough, footnotes, task lists, definition
    lists and bare URLs are enabled.
    """

    def __init__(self, plugins: list[str] | None = None):
        self.plugins = list(MARKDOWN_PLUGINS if plugins is None else plugins)

    def render(self, markdown: str) -> str:
        """Render markdown to HTML.

        Args:
            markdown: Markdown source.

        Returns:
            Rendered HTML.
        """
        # Renderers carry per-document heading state, so build one per call.
        parser = mistune.create_markdown(renderer=_PostHTMLRenderer(), plugins=self.plugins)
        return parser(markdown)


class ContentTransformer:
    """Turns a post body into cleaned markdown plus rendered HTML.

    Attributes:
        renderer: Markdown renderer used for the HTML step.
    """

    def __init__(self, renderer: MarkdownRenderer | None = None):
        self.renderer = renderer or MarkdownRenderer()

    def transform(self, markdown: str) -> tuple[str, str]:
        """Strip the opening heading and render the remainder.

        Args:
            markdown: Markdown body following the front matter.

        Returns:
            Tuple of (cleaned markdown, HTML).
        """
        cleaned = strip_leading_heading(markdown)
        return cleaned, self.renderer.render(cleaned)
