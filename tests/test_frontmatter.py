"""Tests for front-matter splitting."""

import pytest
import os
import json

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from pressmark.errors import FrontmatterParseError
from pressmark.frontmatter import find_frontmatter_end, parse_post_source, split_frontmatter


class TestSplitFrontmatter:
    """Test cases for split_frontmatter."""

    def test_flat_object(self):
        """Test the body starts right after the closing brace."""
        metadata, body = split_frontmatter('{"a":"b"}rest')
        assert metadata == {'a': 'b'}
        assert body == 'rest'

    def test_nested_object(self):
        """Test an inner closing brace does not end the front-matter."""
        metadata, body = split_frontmatter('{"a":{"b":1}}rest')
        assert metadata == {'a': {'b': 1}}
        assert body == 'rest'

    def test_dumped_metadata_with_markdown_body(self):
        """Test metadata written with json.dumps comes back unchanged."""
        meta = {'description': 'A post', 'tags': ['x', 'y'], 'extra': {'n': 2}}
        body = '\n# Title\n\nText with a closing } brace later.\n'
        metadata, rest = split_frontmatter(json.dumps(meta) + body)
        assert metadata == meta
        assert rest == body

    def test_braces_in_body_are_ignored(self):
        """Test braces after the balance point stay in the body."""
        metadata, body = split_frontmatter('{"a":1}\n{not json}')
        assert metadata == {'a': 1}
        assert body == '\n{not json}'

    def test_escaped_brace_is_not_counted(self):
        """Test a backslash before a brace suppresses counting it."""
        assert find_frontmatter_end('{"a":"x\\}"}tail') == 10

    def test_unbalanced_braces(self):
        """Test front-matter that never closes is rejected."""
        with pytest.raises(FrontmatterParseError, match="Unbalanced"):
            split_frontmatter('{"a": {"b": 1}\n# body')

    def test_invalid_json(self):
        """Test balanced but invalid JSON is rejected."""
        with pytest.raises(FrontmatterParseError, match="Invalid JSON"):
            split_frontmatter("{description: 'single quotes'}\nbody")


class TestParsePostSource:
    """Test cases for parse_post_source."""

    def test_without_frontmatter(self):
        """Test content not starting with a brace is all body."""
        metadata, body = parse_post_source('# Title\n{"a": 1}')
        assert metadata == {}
        assert body == '# Title\n{"a": 1}'

    def test_with_frontmatter(self):
        """Test content starting with a brace is split."""
        metadata, body = parse_post_source('{"description": "d"}\n# Title')
        assert metadata == {'description': 'd'}
        assert body == '\n# Title'
