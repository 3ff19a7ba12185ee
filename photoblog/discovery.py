"""
Post discovery.

Every immediate sub-folder of the images root is one post. A post folder
holds an image and, optionally, a metadata file:

    images/
      sunset/
        DSC_0042.jpg
        meta.yml      # title, posted, location, comments, tags, extra

Folders are read in name order and the resulting posts keep that order;
sorting them (by date, say) is up to the caller.
"""

import logging
from dataclasses import replace
from datetime import date, datetime, time, timezone
from pathlib import Path
from typing import Any

from photoblog import constants, files
from photoblog.errors import (
    MetadataError,
    NoFilesError,
    NoImageFoundError,
    NotDirectoryError,
)
from photoblog.model import ImageInfo, Meta, Post

log = logging.getLogger(__name__)


def discover_posts(
    images_path: Path,
    *,
    extensions: tuple[str, ...] = constants.IMAGE_EXTENSIONS,
    meta_file: str = constants.DISCOVERY_FILE_META,
    log: logging.Logger = log,
) -> list[Post]:
    """Read every post folder under ``images_path``.

    Stops at the first folder that fails to read; no partial list is returned.
    """
    log.info("searching `%s` for images as posts", images_path)
    if not images_path.is_dir():
        raise NotDirectoryError("images path is not a directory", images_path)

    posts = []
    for entry in files.list_dir(images_path):
        if not entry.is_dir:
            continue
        log.info("reading `%s` as post", entry.path)
        posts.append(read_post(entry.path, extensions=extensions, meta_file=meta_file))
    return posts


def read_post(
    path: Path,
    *,
    extensions: tuple[str, ...] = constants.IMAGE_EXTENSIONS,
    meta_file: str = constants.DISCOVERY_FILE_META,
) -> Post:
    """Merge a folder's metadata file and first image into a Post."""
    if not path.is_dir():
        raise NotDirectoryError("not a directory", path)

    entries = files.list_dir(path)
    if not entries:
        raise NoFilesError("no child files found", path)

    meta = Meta()
    original = None
    image = ImageInfo()
    mod_time = None
    for entry in entries:
        if entry.is_dir:
            continue
        if entry.name == meta_file:
            meta = parse_meta(files.read_yaml(entry.path), entry.path)
        elif original is None and files.has_extension(entry.name, extensions):
            # only the first image counts; any others in the folder are ignored
            original = entry
            image = files.read_image(entry.path)
            mod_time = entry.mod_time

    if original is None:
        raise NoImageFoundError("no images found", path)

    if meta.posted is None:
        meta = replace(meta, posted=mod_time)

    return Post(
        original=str(original.path),
        file=original.name,
        folder=path.name,
        image=image,
        meta=meta,
    )


def parse_meta(data: Any, path: Path) -> Meta:
    """Validate the parsed contents of a metadata file."""
    if data is None:
        return Meta()
    if not isinstance(data, dict):
        raise MetadataError(f"metadata must be a mapping, got {type(data).__name__}", path)

    tags = data.get("tags") or []
    if isinstance(tags, str):
        tags = [t.strip() for t in tags.split(",") if t.strip()]
    elif not isinstance(tags, list):
        raise MetadataError(f"'tags' must be a list, got {type(tags).__name__}", path)

    extra = data.get("extra") or {}
    if not isinstance(extra, dict):
        raise MetadataError(f"'extra' must be a mapping, got {type(extra).__name__}", path)

    return Meta(
        posted=_parse_posted(data.get("posted"), path),
        title=_text(data.get("title")),
        location=_text(data.get("location")),
        comments=_text(data.get("comments")),
        tags=tuple(str(t) for t in tags),
        extra={str(k): _text(v) for k, v in extra.items()},
    )


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _parse_posted(value: Any, path: Path) -> datetime | None:
    # YAML already turns unquoted timestamps into datetime/date objects
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, str):
        try:
            return _as_utc(datetime.fromisoformat(value.strip()))
        except ValueError as e:
            raise MetadataError(f"'posted' is not an ISO-8601 timestamp: {value!r}", path) from e
    raise MetadataError(f"'posted' must be a timestamp, got {type(value).__name__}", path)


def _as_utc(value: datetime) -> datetime:
    # timestamps without an offset are read as UTC, like the mtime default
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
