"""The build pipeline: discover, prepare output, render, copy statics."""

import logging

from photoblog import files
from photoblog.config import Config
from photoblog.discovery import discover_posts
from photoblog.errors import OutputPathError
from photoblog.render import Renderer


def create_output_path(config: Config):
    """Create the output directory if it doesn't exist."""
    output_path = config.output_or_default()
    if output_path.exists() and not output_path.is_dir():
        raise OutputPathError("output path exists and is not a directory", output_path)
    files.make_dir(output_path)


def copy_statics(config: Config, log: logging.Logger):
    """Copy static files and folders (css, js, ...) into the output root."""
    output_path = config.output_or_default()
    for static_path in config.layout.statics_or_default():
        log.info("copying static %s", static_path)
        files.copy(static_path, output_path / static_path.name)


def generate(config: Config, log: logging.Logger | None = None):
    """Build the whole site described by ``config``.

    Each step runs only if the previous one succeeded; the first error is
    raised as is. Nothing already written is removed on failure.
    """
    log = log or logging.getLogger("photoblog")

    posts = discover_posts(
        config.images_or_default(),
        extensions=config.image_extensions_or_default(),
        meta_file=config.meta_file_or_default(),
        log=log,
    )
    log.info("discovered %d posts", len(posts))

    create_output_path(config)
    Renderer(config, log).render(posts)
    copy_statics(config, log)
