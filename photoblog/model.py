"""Posts and the view model handed to templates."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import PurePath
from typing import TYPE_CHECKING, Iterable, Mapping

from photoblog.constants import SLUG_FALLBACK
from photoblog.slugs import slugify

if TYPE_CHECKING:
    from photoblog.config import Config


@dataclass(frozen=True)
class Meta:
    """Optional data read from a post's metadata file."""

    posted: datetime | None = None
    title: str = ""
    location: str = ""
    comments: str = ""
    tags: tuple[str, ...] = ()
    extra: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ImageInfo:
    """Format and dimensions of a decoded image."""

    format: str = ""
    width: int = 0
    height: int = 0

    def is_zero(self) -> bool:
        return not self.format and self.width == 0 and self.height == 0

    @property
    def aspect_ratio(self) -> float:
        if not self.height:
            return 0.0
        return self.width / self.height

    @property
    def is_landscape(self) -> bool:
        return self.width > self.height

    @property
    def is_portrait(self) -> bool:
        return self.height > self.width


@dataclass(frozen=True)
class Post:
    """One photo post: an image, its metadata and the folder it came from.

    ``Post()`` is the empty post, used where a post has no previous or next
    neighbor.
    """

    original: str = ""
    file: str = ""
    folder: str = ""
    image: ImageInfo = field(default_factory=ImageInfo)
    meta: Meta = field(default_factory=Meta)

    def is_zero(self) -> bool:
        return not self.original

    def is_valid(self) -> bool:
        return bool(self.original) and not self.image.is_zero()

    def title_or_default(self) -> str:
        """The metadata title, else the folder name, else the image file stem."""
        if self.meta.title:
            return self.meta.title
        if self.folder:
            return self.folder
        return PurePath(self.file).stem

    def slug(self, reserved: Iterable[str] = ()) -> str:
        """Name of the output folder for this post.

        Derived from the title; falls back to the folder name when the title
        slug is empty or matches one of the ``reserved`` output names.
        """
        taken = {name.lower() for name in reserved}
        for candidate in (self.title_or_default(), self.folder):
            slug = slugify(candidate)
            if slug and slug not in taken:
                return slug
        return SLUG_FALLBACK


@dataclass(frozen=True)
class ViewModel:
    """Everything a single template execution can see.

    Page templates get ``posts``; the post template additionally gets the
    current ``post`` and its ``previous`` and ``next`` neighbors, which are
    empty posts at either end of the sequence.
    """

    config: Config
    posts: tuple[Post, ...] = ()
    post: Post = field(default_factory=Post)
    previous: Post = field(default_factory=Post)
    next: Post = field(default_factory=Post)

    def slug_for(self, post: Post) -> str:
        """Output folder name of ``post``, as the renderer computes it."""
        return post.slug(self.config.reserved_names())

    def as_context(self) -> dict:
        return {
            "config": self.config,
            "posts": self.posts,
            "post": self.post,
            "previous": self.previous,
            "next": self.next,
            "slug": self.slug_for,
        }
