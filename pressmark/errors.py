"""
Exceptions raised while publishing a site.

Every error is fatal to the run: the publisher logs it and the CLI exits with
a non-zero status.
"""


class PublishError(Exception):
    """Base class for all publishing failures."""


class ConfigParseError(PublishError, ValueError):
    """The configuration file is malformed or has the wrong shape."""


class DirectoryCreateError(PublishError):
    """A required input or output directory could not be created."""


class FrontmatterParseError(PublishError):
    """The JSON front-matter of a post is invalid or its braces never balance."""


class TemplateNotFoundError(PublishError):
    """A required template (e.g. ``post``) was not loaded."""


class RenderError(PublishError):
    """A Markdown, template or stylesheet engine failed."""


class HighlightError(RenderError):
    """The code highlighter failed on a fenced code block."""


class WriteError(PublishError):
    """An output file could not be written."""
