"""Apply the post template to posts and render the site pages."""

import asyncio
import logging
from typing import Dict, List

from . import fs
from .errors import PublishError, RenderError, TemplateNotFoundError
from .loaders import is_template
from .models import CompiledTemplate, Page, Post, SiteConfig
from .templates import compile_template

logger = logging.getLogger('pressmark.render')

POST_TEMPLATE = 'post'


def apply_post_template(posts: List[Post], templates: Dict[str, CompiledTemplate],
                        site: SiteConfig, minify: bool) -> List[Post]:
    """
    Render every post through the ``post`` template into ``final_html``.

    Raises:
        TemplateNotFoundError: If no template is named ``post``.
        RenderError: If any post fails to render.
    """
    logger.debug("Applying post templates ...")
    post_template = templates.get(POST_TEMPLATE)
    if post_template is None:
        raise TemplateNotFoundError(
            f"No '{POST_TEMPLATE}' template found (loaded: {', '.join(sorted(templates)) or 'none'})"
        )
    for post in posts:
        try:
            post.final_html = post_template.render(
                filename=post.file_name,
                site=site,
                page=post,
                content=post.rendered_body,
                pretty=not minify,
            )
        except PublishError:
            raise
        except Exception as e:
            raise RenderError(f"Failed to render post {post.file_name}: {e}") from e
    logger.debug("... applied post templates.")
    return posts


def render_page(template: CompiledTemplate, site, posts, posts_dir, minify):
    try:
        html = template.render(site=site, posts=posts, posts_dir=posts_dir, pretty=not minify)
    except PublishError:
        raise
    except Exception as e:
        raise RenderError(f"Failed to render page {template.name}: {e}") from e
    return Page(template.name + '.html', html)


async def render_pages(page_dir: str, env, site: SiteConfig, posts: List[Post],
                       posts_dir: str, minify: bool) -> List[Page]:
    """
    Render each page template in ``page_dir``.

    Pages get the full post list and ``posts_dir``, the link directory of the
    published posts, for building indexes. Posts are still being rendered
    through the post template, so ``final_html`` must not be read here.
    """
    logger.debug("Rendering pages ...")
    files = await fs.read_files_in_dir(page_dir, is_template)
    templates = [compile_template(env, file.data, file.path) for file in files]
    pages = await asyncio.gather(*(
        asyncio.to_thread(render_page, template, site, posts, posts_dir, minify)
        for template in templates
    ))
    logger.debug(f"... rendered {len(pages)} pages.")
    return list(pages)
