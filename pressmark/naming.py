"""Derive a post's date, title and URL-safe file name from its file name."""

import re
from collections import namedtuple
from datetime import date, datetime

DATE_FORMATS = ['%Y-%m-%dT%H:%M:%S', '%Y-%m-%d', '%b %d, %Y']

# Runs of whitespace and dots become a single dash.
SEPARATOR_RE = re.compile(r'[\s.]+')
BAD_URL_CHARS_RE = re.compile(r'[£$%^&()+=,\[\]]')

PostNames = namedtuple('PostNames', ['date', 'title', 'url_name'])


def parse_date(value):
    """Parse a date string, returning None when no known format matches."""
    if isinstance(value, datetime):
        return value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        for fmt in DATE_FORMATS:
            try:
                return datetime.strptime(value, fmt)
            except ValueError:
                continue
    return None


def make_url_name(base_name):
    """Make a file name safe for URLs and append ``.html``."""
    name = SEPARATOR_RE.sub('-', base_name)
    name = name.replace('#', 'Sharp')
    name = BAD_URL_CHARS_RE.sub('', name)
    return name + '.html'


def derive_post_names(base_name):
    """
    Split ``<date>_<title>`` on the first underscore.

    Without an underscore the date string is empty (so the date is None) and
    the title is the whole name. Never raises.
    """
    div = base_name.find('_')
    date_str = base_name[:div] if div >= 0 else ''
    title = base_name[div + 1:]
    return PostNames(parse_date(date_str), title, make_url_name(base_name))
