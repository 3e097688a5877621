"""
pressmark - a static web-log publisher.

pressmark reads Markdown posts with optional JSON front-matter, Jinja2
templates, LESS stylesheets and scripts from an input tree and publishes a
static site into an output tree.
"""

__version__ = "1.0.0"

from .core import Publisher
from .settings import SiteSettings

__all__ = ['Publisher', 'SiteSettings']
