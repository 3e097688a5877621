"""Data structures shared by the publishing pipeline."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class NavEntry:
    url: str
    text: str


@dataclass(frozen=True)
class DirSpec:
    """A base directory plus role name -> relative sub-path."""
    dir: str
    dirs: Dict[str, str]


@dataclass(frozen=True)
class SiteConfig:
    """
    Site configuration, fixed for the duration of a run.

    Templates receive this object as ``site``.
    """
    title: str
    description: str
    base_url: str
    nav: List[NavEntry]
    test_dir: str
    input_dir: DirSpec
    output_dir: DirSpec
    stylesheets: List[Tuple[str, str]] = field(default_factory=list)


@dataclass
class SourceFile:
    """A file read from disk. Scripts are published as-is in this form."""
    name: str
    path: str
    data: str


@dataclass
class Post:
    """
    A Markdown post.

    ``rendered_body`` holds the Markdown output and ``final_html`` the full
    page once the ``post`` template has been applied. Front-matter keys can be
    read as attributes, so templates may use ``page.description``.
    """
    file_path: str
    file_name: str
    metadata: Dict[str, Any]
    rendered_body: str
    title: str
    date: Optional[datetime]
    url_name: str
    url: str
    final_html: Optional[str] = None

    def __getattr__(self, name):
        if name == 'metadata' or name.startswith('__'):
            raise AttributeError(name)
        try:
            return self.metadata[name]
        except KeyError:
            raise AttributeError(name) from None


@dataclass(frozen=True)
class CompiledTemplate:
    name: str
    template: Any

    def render(self, **context) -> str:
        return self.template.render(**context)


@dataclass(frozen=True)
class Page:
    file_name: str
    html: str


@dataclass(frozen=True)
class RenderedStylesheet:
    file_name: str
    css: str
