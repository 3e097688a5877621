"""Load posts, templates and scripts from the input directories."""

import logging
import os
import posixpath
from typing import Dict, List

from . import fs
from .frontmatter import parse_post_source
from .models import CompiledTemplate, Post, SourceFile
from .naming import derive_post_names
from .templates import compile_template

logger = logging.getLogger('pressmark.loaders')


def is_markdown(file_name):
    return file_name.endswith('.md')


def is_template(file_name):
    return file_name.endswith('.html')


def build_post(file: SourceFile, link_dir: str, renderer) -> Post:
    """Split front-matter, render Markdown and derive names for one file."""
    metadata, markdown_content = parse_post_source(file.data)
    if metadata:
        logger.debug(f"{file.name}: {metadata.get('description')}")
    base_name = os.path.splitext(os.path.basename(file.path))[0]
    names = derive_post_names(base_name)
    logger.debug(names.url_name)
    return Post(
        file_path=file.path,
        file_name=file.name,
        metadata=metadata,
        rendered_body=renderer.convert(markdown_content),
        title=names.title,
        date=names.date,
        url_name=names.url_name,
        url=posixpath.join(link_dir, names.url_name),
    )


async def load_posts(posts_dir: str, link_dir: str, renderer) -> List[Post]:
    """
    Load posts from ``posts_dir`` (not recursive).

    ``link_dir`` is the output posts directory relative to the site root and
    is used to build each post's url.
    """
    logger.debug("Loading posts ...")
    files = await fs.read_files_in_dir(posts_dir, is_markdown)
    posts = []
    seen = {}
    for file in files:
        post = build_post(file, link_dir, renderer)
        if post.url_name in seen:
            logger.warning(
                f"{file.name} and {seen[post.url_name]} both publish to {post.url_name}; "
                f"the later write wins"
            )
        seen[post.url_name] = file.name
        posts.append(post)
    logger.debug(f"... {len(posts)} posts loaded.")
    return posts


async def load_templates(templates_dir: str, env, debug: bool = False) -> Dict[str, CompiledTemplate]:
    """Compile every template in ``templates_dir``; one failure fails them all."""
    logger.debug("Loading templates ...")
    files = await fs.read_files_in_dir(templates_dir, is_template)
    templates = {}
    for file in files:
        template = compile_template(env, file.data, file.path)
        if debug:
            logger.debug(f"compiled template {template.name} from {file.path}")
        templates[template.name] = template
    logger.debug("... templates loaded.")
    return templates


async def load_scripts(js_dir: str) -> List[SourceFile]:
    """Read every file in ``js_dir``. Scripts are published unchanged."""
    files = await fs.read_files_in_dir(js_dir)
    logger.debug(f"loaded {len(files)} js files")
    return files
