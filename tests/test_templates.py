"""Tests for template compilation."""

import pytest
import os

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from pressmark.errors import RenderError
from pressmark.templates import compile_template, create_environment, template_name


class TestTemplates:
    """Test cases for the Jinja2 helpers."""

    def test_template_name_strips_extension(self):
        """Test the logical name is the base name without extension."""
        assert template_name('/some/dir/post.html') == 'post'

    def test_compile_and_render(self, temp_dir):
        """Test compiled templates render with keyword context."""
        env = create_environment(temp_dir)
        template = compile_template(env, 'Hello {{ name }}', os.path.join(temp_dir, 'greet.html'))
        assert template.name == 'greet'
        assert template.render(name='World') == 'Hello World'

    def test_extends_from_search_dirs(self, site_tree):
        """Test templates can extend layouts found in the search dirs."""
        env = create_environment(os.path.join(site_tree, 'templates'))
        template = compile_template(
            env, '{% extends "layout.html" %}{% block body %}X{% endblock %}', 'page.html')
        assert '<body>X</body>' in template.render(site={'title': 'T'})

    def test_syntax_error_names_file(self, temp_dir):
        """Test a syntax error raises RenderError mentioning the file."""
        env = create_environment(temp_dir)
        path = os.path.join(temp_dir, 'broken.html')
        with pytest.raises(RenderError, match='broken.html'):
            compile_template(env, '{% if %}', path)
