"""Markdown to HTML with Pygments highlighting for fenced code."""

import logging

import mistune
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from .errors import HighlightError

logger = logging.getLogger('pressmark.markdown')


class HighlightRenderer(mistune.HTMLRenderer):
    """HTML renderer that highlights fenced code with a known language."""

    def __init__(self):
        super().__init__(escape=False)
        self.formatter = HtmlFormatter(nowrap=True)

    def block_code(self, code, info=None):
        lang = info.strip().split(None, 1)[0] if info and info.strip() else None
        if not lang:
            return super().block_code(code, info)
        try:
            lexer = get_lexer_by_name(lang)
        except ClassNotFound:
            return super().block_code(code, info)
        try:
            highlighted = highlight(code, lexer, self.formatter)
        except Exception as e:
            logger.error(f"Highlight error for language {lang}: {e}")
            raise HighlightError(f"Failed to highlight {lang} code block: {e}") from e
        return '<pre><code class="language-{}">{}</code></pre>\n'.format(
            mistune.escape(lang), highlighted)


def create_markdown_parser():
    """Create a Mistune markdown parser with the highlighting renderer."""
    return mistune.create_markdown(
        renderer=HighlightRenderer(),
        plugins=['table', 'task_lists', 'strikethrough']
    )


class MarkdownRenderer:
    def __init__(self):
        self.markdown_parser = create_markdown_parser()

    def convert(self, text):
        """Convert markdown text to HTML."""
        return self.markdown_parser(text)
