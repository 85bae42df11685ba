"""Markdown + LaTeX rendering for exam questions.

Question text is converted to HTML with markdown-it. Math delimiters are left
untouched and typeset by MathJax when the page is displayed, both in the Qt
web view and by API clients that embed the returned fragment.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from string import Template
from typing import Sequence

from markdown_it import MarkdownIt

from exam_app.utils.time_format import option_letter

MATHJAX_URL = "https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-mml-chtml.js"

_PAGE = Template(
    """<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<title>$title</title>
<style>
  body { margin: 0; padding: 1rem; font-family: system-ui, sans-serif; }
  .exam-question { font-size: ${font_size}pt; line-height: 1.5; }
  .exam-question strong { margin-right: 0.25em; }
</style>
<script>
  window.MathJax = { tex: { inlineMath: [['$$', '$$']], displayMath: [['$$$$', '$$$$']] } };
</script>
<script defer src="$mathjax_url"></script>
</head>
<body>
<div class="exam-question">$body</div>
</body>
</html>"""
)


@dataclass(slots=True)
class MarkdownMathRenderer:
    """Turns question markdown into HTML fragments and standalone pages."""

    allow_raw_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = MarkdownIt("commonmark", {"html": self.allow_raw_html}).enable("table")

    def render_fragment(self, markdown_text: str) -> str:
        text = markdown_text.strip()
        if not text:
            return "<p><em>No content provided.</em></p>"
        return self._markdown.render(text)

    def render_question(self, question_text: str, options: Sequence[str]) -> str:
        """Question text followed by one paragraph per lettered option."""
        parts = [question_text.strip() or "(No question text)"]
        parts.extend(
            f"**{option_letter(idx)}.** {option or '(empty)'}" for idx, option in enumerate(options)
        )
        return self.render_fragment("\n\n".join(parts))

    def wrap_with_mathjax(self, body_html: str, title: str = "ExamPrep", font_size: int = 14) -> str:
        return _PAGE.substitute(title=title, font_size=font_size, mathjax_url=MATHJAX_URL, body=body_html)


# Shared by the Qt thread and the API worker threads; renders are read-only.
renderer = MarkdownMathRenderer()
