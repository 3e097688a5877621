import asyncio
import enum
import logging

from . import fs
from .dirs import prepare_dirs
from .graph import TaskGraph
from .loaders import load_posts, load_scripts, load_templates
from .markdown_renderer import MarkdownRenderer
from .render import apply_post_template, render_pages
from .styles import render_stylesheets
from .templates import create_environment


class Stage(enum.Enum):
    CONFIG_LOADED = 'config loaded'
    DIRS_PREPARED = 'directories prepared'
    LOADED = 'sources loaded'
    RENDERED = 'posts and pages rendered'
    WRITTEN = 'output written'
    COMPLETE = 'complete'
    FAILED = 'failed'


# A stage is reached once all of its steps have finished.
STAGE_STEPS = [
    (Stage.LOADED, {'templates', 'posts', 'scripts', 'stylesheets'}),
    (Stage.RENDERED, {'apply_post_template', 'render_pages'}),
    (Stage.WRITTEN, {'write_posts', 'write_pages', 'write_stylesheets', 'write_scripts'}),
]


class ProgressFilter(logging.Filter):
    """Let through warnings, errors and selected INFO milestones only."""
    def filter(self, record):
        if record.levelno >= logging.WARNING:
            return True
        allowed_messages = [
            "Config:",
            "Test mode activated",
            "Published",
            "Publish complete",
        ]
        return any(msg in record.getMessage() for msg in allowed_messages)


def setup_logging(debug=False):
    """Set up console logging; debug mode shows every progress message."""
    logger = logging.getLogger('pressmark')
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter('%(message)s'))
        logger.addHandler(console_handler)
    for handler in logger.handlers:
        handler.setLevel(logging.DEBUG if debug else logging.INFO)
        for existing in [f for f in handler.filters if isinstance(f, ProgressFilter)]:
            handler.removeFilter(existing)
        if not debug:
            handler.addFilter(ProgressFilter())
    return logger


class Publisher:
    """
    Publishes a site from the input tree to the output tree.

    Input directories are created first, then output directories; after that
    the loaders, renderers and writers run as a dependency graph.
    """

    def __init__(self, config, debug=False, test=False):
        self.config = config
        self.debug = debug
        self.test = test
        self.minify = not test
        self.logger = logging.getLogger('pressmark')
        self.stage = Stage.CONFIG_LOADED
        self.stages = [Stage.CONFIG_LOADED]
        self.steps_done = set()
        self.in_dirs = {}
        self.out_dirs = {}
        self.graph = None
        self.posts_published = 0
        self.pages_published = 0

    async def prepare(self):
        """Create input directories, then output directories, one by one."""
        self.in_dirs = await prepare_dirs(self.config.input_dir)
        self.out_dirs = await prepare_dirs(self.config.output_dir)
        self._enter(Stage.DIRS_PREPARED)

    def _enter(self, stage):
        self.stage = stage
        self.stages.append(stage)
        self.logger.debug(f"Stage: {stage.value}")

    def _step_done(self, name):
        self.steps_done.add(name)
        for stage, steps in STAGE_STEPS:
            if stage in self.stages:
                continue
            if not steps <= self.steps_done:
                break
            self._enter(stage)

    def build_graph(self):
        """
        Wire the build steps.

        Writing: out_dirs[role] + file name.
        Linking: config.output_dir.dirs[role] + file name, relative to base_url.
        """
        in_dirs = self.in_dirs
        out_dirs = self.out_dirs
        posts_link_dir = self.config.output_dir.dirs['posts']
        site = self.config
        minify = self.minify
        env = create_environment(in_dirs['templates'], in_dirs['content'])
        renderer = MarkdownRenderer()

        async def templates():
            return await load_templates(in_dirs['templates'], env, self.debug)

        async def posts():
            return await load_posts(in_dirs['posts'], posts_link_dir, renderer)

        async def scripts():
            return await load_scripts(in_dirs['js'])

        async def stylesheets():
            return await render_stylesheets(in_dirs['css'], site.stylesheets, minify)

        async def apply_posts(loaded_posts, loaded_templates):
            return await asyncio.to_thread(
                apply_post_template, loaded_posts, loaded_templates, site, minify)

        async def pages(loaded_posts, loaded_templates):
            return await render_pages(in_dirs['content'], env, site, loaded_posts, posts_link_dir, minify)

        async def write_posts(rendered_posts):
            await fs.write_many((out_dirs['posts'], post.url_name, post.final_html)
                                for post in rendered_posts)
            self.posts_published = len(rendered_posts)

        async def write_pages(rendered_pages):
            await fs.write_many((out_dirs['content'], page.file_name, page.html)
                                for page in rendered_pages)
            self.pages_published = len(rendered_pages)

        async def write_stylesheets(rendered):
            await fs.write_many((out_dirs['css'], sheet.file_name, sheet.css) for sheet in rendered)

        async def write_scripts(files):
            await fs.write_many((out_dirs['js'], file.name, file.data) for file in files)

        graph = TaskGraph(on_complete=self._step_done)
        graph.add('templates', templates)
        graph.add('posts', posts)
        graph.add('scripts', scripts)
        graph.add('stylesheets', stylesheets)
        graph.add('apply_post_template', apply_posts, deps=('posts', 'templates'))
        # Pages share the template environment, so a broken template stops them too.
        graph.add('render_pages', pages, deps=('posts', 'templates'))
        graph.add('write_posts', write_posts, deps=('apply_post_template',))
        graph.add('write_pages', write_pages, deps=('render_pages',))
        graph.add('write_stylesheets', write_stylesheets, deps=('stylesheets',))
        graph.add('write_scripts', write_scripts, deps=('scripts',))
        return graph

    async def publish(self):
        """Run the whole build. Any failure is logged and re-raised."""
        try:
            await self.prepare()
            self.graph = self.build_graph()
            await self.graph.run()
        except Exception as e:
            self._enter(Stage.FAILED)
            step = self.graph.failed if self.graph is not None else None
            where = f" in step '{step}'" if step else ''
            self.logger.error(f"Publish failed{where}: {e}", exc_info=True)
            raise
        self._enter(Stage.COMPLETE)
        self.logger.info(f"Published {self.posts_published} posts and {self.pages_published} pages.")
        self.logger.info("Publish complete.")
