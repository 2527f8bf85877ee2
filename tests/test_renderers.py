from quill.renderers import (
    ContentTransformer,
    MarkdownRenderer,
    _generate_heading_id,
    strip_leading_heading,
)

# --- strip_leading_heading ---


def test_leading_h1_is_removed_and_rest_kept():
    source = "# Title\n\nIntro text.\n\n# Another H1\n\n## Section"
    assert strip_leading_heading(source) == "\nIntro text.\n\n# Another H1\n\n## Section"


def test_leading_blank_lines_are_preserved():
    source = "\n\n  \n# Title\nBody"
    assert strip_leading_heading(source) == "\n\n  \nBody"


def test_first_line_not_heading_is_unchanged():
    source = "Intro paragraph.\n\n# Later heading\nMore"
    assert strip_leading_heading(source) == source


def test_only_level_one_heading_is_removed():
    source = "## Subtitle\nBody"
    assert strip_leading_heading(source) == source
    assert strip_leading_heading("#NoSpace\nBody") == "#NoSpace\nBody"


def test_indented_heading_counts_as_first_line():
    assert strip_leading_heading("   # Title\nBody") == "Body"


def test_empty_and_blank_input():
    assert strip_leading_heading("") == ""
    assert strip_leading_heading("\n\n") == "\n\n"


# --- MarkdownRenderer ---


def test_render_basic_markdown():
    html = MarkdownRenderer().render("Some **bold** text.")
    assert "<p>Some <strong>bold</strong> text.</p>" in html


def test_render_keeps_code_language_for_highlighter():
    html = MarkdownRenderer().render("```python\nprint('<hi>')\n```\n")
    assert '<pre><code class="language-python">' in html
    assert "&lt;hi&gt;" in html


def test_render_code_without_language():
    html = MarkdownRenderer().render("```\nplain\n```\n")
    assert "<pre><code>plain" in html


def test_render_escapes_code_language():
    html = MarkdownRenderer().render('```x"><img src=x>\ncode\n```\n')
    assert "<img" not in html
    assert '<pre><code class="language-x&' in html


def test_render_tables_and_strikethrough():
    html = MarkdownRenderer().render("| a | b |\n|---|---|\n| 1 | 2 |\n\n~~gone~~\n")
    assert "<table>" in html
    assert "<del>gone</del>" in html


def test_heading_ids_are_deduplicated():
    html = MarkdownRenderer().render("## Setup\n\n## Setup\n")
    assert '<h2 id="setup">Setup</h2>' in html
    assert '<h2 id="setup-1">Setup</h2>' in html


def test_heading_state_does_not_leak_between_renders():
    renderer = MarkdownRenderer()
    renderer.render("## Setup\n")
    html = renderer.render("## Setup\n")
    assert '<h2 id="setup">' in html


def test_generate_heading_id():
    assert _generate_heading_id("Hello World") == "hello-world"
    assert _generate_heading_id("What's <em>new</em>?") == "whats-new"


# --- ContentTransformer ---


def test_transform_returns_cleaned_markdown_and_html():
    cleaned, html = ContentTransformer().transform("# Title\n\nBody text\n\n# Later\n")
    assert cleaned == "\nBody text\n\n# Later\n"
    assert "Title" not in html
    assert "<p>Body text</p>" in html
    assert '<h1 id="later">Later</h1>' in html


def test_transform_uses_injected_renderer():
    class UpperRenderer:
        def render(self, markdown):
            return markdown.upper()

    cleaned, html = ContentTransformer(UpperRenderer()).transform("# T\nbody")
    assert cleaned == "body"
    assert html == "BODY"
