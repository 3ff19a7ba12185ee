"""Errors raised while building the site.

Every error is fatal to the build that raised it. Each carries the path it
was raised for, so the command line can report it without extra context.
"""

from pathlib import Path


class PhotoblogError(Exception):
    """Base exception for all photoblog errors."""

    def __init__(self, message: str, path: str | Path | None = None):
        super().__init__(message)
        self.message = message
        self.path = str(path) if path is not None else None

    def __str__(self) -> str:
        if self.path:
            return f"{self.message}: {self.path}"
        return self.message


class ConfigError(PhotoblogError):
    """The config file is missing or malformed."""


class FilesystemError(PhotoblogError):
    """A read, write, stat or listing failed; the OSError is the __cause__."""


class NotDirectoryError(PhotoblogError):
    """A directory was expected but the path is something else."""


class NoFilesError(PhotoblogError):
    """A post folder has no entries."""


class NoImageFoundError(PhotoblogError):
    """A post folder has no file with a recognized image extension."""


class UnsupportedImageError(PhotoblogError):
    """Pillow could not decode the image."""


class MetadataError(PhotoblogError):
    """The metadata file of a post is not valid."""


class TemplateReadError(PhotoblogError):
    """A template or partial could not be read."""


class TemplateParseError(PhotoblogError):
    """A template or partial failed to compile."""

    def __init__(self, message: str, path: str | Path | None = None, lineno: int | None = None):
        super().__init__(message, path)
        self.lineno = lineno

    def __str__(self) -> str:
        text = super().__str__()
        if self.lineno is not None:
            return f"{text} (line {self.lineno})"
        return text


class TemplateRenderError(PhotoblogError):
    """A compiled template failed while executing."""


class SlugCollisionError(PhotoblogError):
    """Two posts would be written to the same output folder."""


class OutputPathError(PhotoblogError):
    """The output path exists and is not a directory."""
