"""Test configuration and fixtures for pressmark tests."""

import pytest
import tempfile
import shutil
import os
import sys
import json
import logging
from pathlib import Path

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from pressmark.models import DirSpec, NavEntry, Post, SiteConfig

POST_TEMPLATE = """<html>
<head><title>{{ page.title }} - {{ site.title }}</title></head>
<body>{% if pretty %}<!-- pretty -->{% endif %}
<article>{{ content }}</article>
<p class="description">{{ page.description }}</p>
</body>
</html>"""

LAYOUT_TEMPLATE = """<html>
<head><title>{{ site.title }}</title></head>
<body>{% block body %}{% endblock %}</body>
</html>"""

INDEX_PAGE = """{% extends "layout.html" %}
{% block body %}<ul>
{% for post in posts %}<li><a href="{{ post.url }}">{{ post.title }}</a></li>
{% endfor %}</ul>
<p class="posts-dir">{{ posts_dir }}</p>{% endblock %}"""


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers added by setup_logging so tests don't share streams."""
    yield
    logger = logging.getLogger('pressmark')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def site_tree(temp_dir):
    """Create an input tree with posts, templates, pages, a stylesheet and a script."""
    input_dir = Path(temp_dir) / 'input'
    for sub in ['posts', 'templates', 'content', 'css', 'js']:
        (input_dir / sub).mkdir(parents=True)

    (input_dir / 'posts' / '2020-01-01_Hello World.md').write_text(
        '{"description": "First post"}\n# Hello\n\nSome *text*.\n', encoding='utf-8')
    (input_dir / 'posts' / '2021-06-15_Second.md').write_text(
        '# Second\n\n```python\nprint("hi")\n```\n', encoding='utf-8')

    (input_dir / 'templates' / 'post.html').write_text(POST_TEMPLATE, encoding='utf-8')
    (input_dir / 'templates' / 'layout.html').write_text(LAYOUT_TEMPLATE, encoding='utf-8')
    (input_dir / 'content' / 'index.html').write_text(INDEX_PAGE, encoding='utf-8')

    (input_dir / 'css' / 'main.less').write_text(
        '@c: #123456;\n.a {\n  .b {\n    color: @c;\n  }\n}\n', encoding='utf-8')
    (input_dir / 'js' / 'theme.js').write_text(
        'function toggle() {\n    return 1;\n}\n', encoding='utf-8')

    return str(input_dir)


@pytest.fixture
def site_config(temp_dir, site_tree):
    """A SiteConfig pointing at the temporary input tree."""
    return SiteConfig(
        title='Test Site',
        description='A site for tests',
        base_url='https://example.com',
        nav=[NavEntry('index.html', 'Home')],
        test_dir=os.path.join(temp_dir, 'preview'),
        input_dir=DirSpec(site_tree, {
            'posts': 'posts',
            'templates': 'templates',
            'css': 'css',
            'js': 'js',
            'content': 'content',
        }),
        output_dir=DirSpec(os.path.join(temp_dir, 'output'), {
            'content': './',
            'js': 'js',
            'css': 'css',
            'posts': 'posts',
        }),
        stylesheets=[('main.less', 'main.css')],
    )


@pytest.fixture
def config_file(temp_dir, site_config):
    """Write a config.json matching site_config into temp_dir."""
    settings = {
        'title': site_config.title,
        'description': site_config.description,
        'base_url': site_config.base_url,
        'nav': [{'url': n.url, 'text': n.text} for n in site_config.nav],
        'test_dir': site_config.test_dir,
        'input_dir': {'dir': site_config.input_dir.dir, 'dirs': site_config.input_dir.dirs},
        'output_dir': {'dir': site_config.output_dir.dir, 'dirs': site_config.output_dir.dirs},
        'stylesheets': [list(pair) for pair in site_config.stylesheets],
    }
    path = Path(temp_dir) / 'config.json'
    path.write_text(json.dumps(settings, indent=4), encoding='utf-8')
    return str(path)


def make_post(file_name='2020-01-01_Post.md', metadata=None, body='<p>body</p>'):
    """Build a Post without touching the filesystem."""
    base = os.path.splitext(file_name)[0]
    return Post(
        file_path=os.path.join('posts', file_name),
        file_name=file_name,
        metadata=metadata or {},
        rendered_body=body,
        title=base.split('_', 1)[-1],
        date=None,
        url_name=base + '.html',
        url='posts/' + base + '.html',
    )
