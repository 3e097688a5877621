"""Render LESS stylesheets to CSS."""

import asyncio
import logging
import os
import re
from typing import List, Sequence, Tuple

import csscompressor
import lesscpy

from .errors import RenderError
from .models import RenderedStylesheet

logger = logging.getLogger('pressmark.styles')

# Strings and comments, which may hold braces that are not structure.
NON_CODE_RE = re.compile(
    r'"(?:\\.|[^"\\])*"'
    r"|'(?:\\.|[^'\\])*'"
    r'|/\*.*?\*/'
    r'|(?<![:(\w])//[^\n]*',
    re.DOTALL,
)
EMPTY_VALUE_RE = re.compile(r'^\s*[-\w]+\s*:\s*;', re.MULTILINE)


def check_less_source(source):
    """
    Reject LESS that lesscpy would silently drop.

    lesscpy recovers from an unclosed block at end of file by emitting nothing,
    so brace balance is checked before compiling.
    """
    code = NON_CODE_RE.sub(lambda m: '\n' * m.group(0).count('\n'), source)
    depth = 0
    for line_no, line in enumerate(code.splitlines(), 1):
        for char in line:
            if char == '{':
                depth += 1
            elif char == '}':
                depth -= 1
                if depth < 0:
                    raise RenderError(f"Unexpected '}}' on line {line_no}")
    if depth:
        raise RenderError(f"Unclosed block: {depth} '{{' without matching '}}'")


def check_css_output(css):
    """lesscpy passes declarations with no value through untouched."""
    match = EMPTY_VALUE_RE.search(css)
    if match:
        raise RenderError(f"Declaration without a value: {match.group(0).strip()}")


def render_stylesheet(file_path, minify):
    """
    Render a LESS file to CSS.

    The source is opened by its absolute path so lesscpy resolves ``@import``
    relative to the file's directory.
    """
    full_path = os.path.abspath(file_path)
    logger.debug(f"Rendering CSS from {full_path} ...")
    try:
        with open(full_path, 'r', encoding='utf-8') as f:
            check_less_source(f.read())
            f.seek(0)
            css = lesscpy.compile(f)
        check_css_output(css)
    except RenderError as e:
        raise RenderError(f"Failed to render stylesheet {full_path}: {e}") from e
    except (IOError, OSError) as e:
        raise RenderError(f"Failed to read stylesheet {full_path}: {e}") from e
    except Exception as e:
        raise RenderError(f"Failed to render stylesheet {full_path}: {e}") from e
    if minify:
        css = csscompressor.compress(css)
    logger.debug(f"... rendered CSS from {full_path}")
    return css


async def render_stylesheets(css_dir: str, stylesheets: Sequence[Tuple[str, str]],
                             minify: bool) -> List[RenderedStylesheet]:
    """Render every configured (source, output) pair concurrently."""
    async def render_one(source_name, output_name):
        path = os.path.join(css_dir, source_name)
        css = await asyncio.to_thread(render_stylesheet, path, minify)
        return RenderedStylesheet(output_name, css)

    return list(await asyncio.gather(*(render_one(src, out) for src, out in stylesheets)))
