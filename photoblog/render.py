"""Rendering posts and pages to the output directory."""

import logging
from pathlib import Path
from typing import Sequence

from jinja2 import Template

from photoblog import constants, files
from photoblog.config import Config
from photoblog.errors import SlugCollisionError, TemplateRenderError
from photoblog.model import Post, ViewModel
from photoblog.templates import Partial, compile_template, read_partials


class Renderer:
    """Writes site pages and one folder per post.

    Output is written as it is rendered; a failure part way through leaves
    whatever was already written in place.
    """

    def __init__(self, config: Config, log: logging.Logger | None = None):
        self.config = config
        self.log = log or logging.getLogger("photoblog")

    @property
    def output_path(self) -> Path:
        return self.config.output_or_default()

    def render(self, posts: Sequence[Post]):
        posts = tuple(posts)
        partials = read_partials(self.config.layout.partials_or_default())
        self.render_pages(posts, partials)
        self.render_posts(posts, partials)

    def render_pages(self, posts: tuple[Post, ...], partials: Sequence[Partial]):
        """Render each page template once, against the full post list."""
        for page_path in self.config.layout.pages_or_default():
            self.log.info("rendering page %s", page_path)
            page = compile_template(page_path, partials)
            self.write_template(
                page,
                self.output_path / page_path.name,
                ViewModel(config=self.config, posts=posts),
            )

    def render_posts(self, posts: tuple[Post, ...], partials: Sequence[Partial]):
        """Render ``<slug>/index.html`` for every post and copy its image next to it."""
        slugs = self.slugs(posts)
        post_template = compile_template(self.config.layout.post_or_default(), partials)

        for index, (post, slug) in enumerate(zip(posts, slugs)):
            self.log.info("rendering post %s", post.title_or_default())
            slug_path = self.output_path / slug
            files.make_dir(slug_path)

            previous = posts[index - 1] if index > 0 else Post()
            next_post = posts[index + 1] if index < len(posts) - 1 else Post()
            self.write_template(
                post_template,
                slug_path / constants.OUTPUT_FILE_INDEX,
                ViewModel(
                    config=self.config,
                    posts=posts,
                    post=post,
                    previous=previous,
                    next=next_post,
                ),
            )

            original = Path(post.original)
            files.copy_or_resize(original, slug_path / original.name, self.config.max_image_size)

    def slugs(self, posts: Sequence[Post]) -> list[str]:
        """Output folder names, in post order. Duplicates are an error."""
        reserved = self.config.reserved_names()
        owners: dict[str, Post] = {}
        slugs = []
        for post in posts:
            slug = post.slug(reserved)
            if slug in owners:
                raise SlugCollisionError(
                    f"posts {owners[slug].folder!r} and {post.folder!r} share the slug {slug!r}",
                    post.original,
                )
            owners[slug] = post
            slugs.append(slug)
        return slugs

    def write_template(self, template: Template, output_path: Path, view: ViewModel):
        """Execute ``template`` and write the result, replacing any existing file."""
        try:
            contents = template.render(view.as_context())
        except Exception as e:
            # user templates can raise anything, not only jinja2 errors
            raise TemplateRenderError(f"template failed: {e}", output_path) from e
        files.write_text(output_path, contents)
