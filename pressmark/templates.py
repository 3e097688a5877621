"""Jinja2 environment and template compilation."""

import os

from jinja2 import Environment, FileSystemLoader, TemplateSyntaxError

from .errors import RenderError
from .models import CompiledTemplate


def create_environment(*search_dirs):
    """
    Create the shared Jinja2 environment.

    ``search_dirs`` are used to resolve ``{% extends %}`` and ``{% include %}``.
    """
    return Environment(loader=FileSystemLoader([d for d in search_dirs if d]))


def template_name(file_path):
    """Logical template name: the file name without its extension."""
    return os.path.splitext(os.path.basename(file_path))[0]


def compile_template(env, source, file_path):
    """
    Compile template source text into a CompiledTemplate.

    ``file_path`` is only used for error messages and tracebacks.
    """
    try:
        code = env.compile(source, name=os.path.basename(file_path), filename=file_path)
    except TemplateSyntaxError as e:
        raise RenderError(f"Template syntax error in {file_path}: {e}") from e
    template = env.template_class.from_code(env, code, env.make_globals(None))
    return CompiledTemplate(template_name(file_path), template)
