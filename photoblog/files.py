"""Filesystem helpers: listings, copies, image decoding.

OSErrors are re-raised as FilesystemError with the offending path attached.
"""

import shutil
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import yaml
from PIL import Image, UnidentifiedImageError

from photoblog.errors import FilesystemError, MetadataError, UnsupportedImageError
from photoblog.model import ImageInfo


@dataclass(frozen=True)
class Entry:
    name: str
    path: Path
    is_dir: bool
    mod_time: datetime


def list_dir(path: Path) -> list[Entry]:
    """Entries of a directory, sorted by name."""
    entries = []
    try:
        for child in sorted(path.iterdir(), key=lambda p: p.name):
            # lstat so a dangling link does not abort the listing
            stat = child.lstat()
            entries.append(Entry(
                name=child.name,
                path=child,
                is_dir=child.is_dir(),
                mod_time=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
            ))
    except OSError as e:
        raise FilesystemError(f"cannot list directory: {e.strerror}", path) from e
    return entries


def has_extension(name: str, extensions: tuple[str, ...]) -> bool:
    return Path(name).suffix.lower() in extensions


def make_dir(path: Path):
    """mkdir -p"""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(f"cannot create directory: {e.strerror}", path) from e


def read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise FilesystemError(f"cannot read file: {e.strerror}", path) from e


def write_text(path: Path, contents: str):
    """Create or truncate ``path`` and write ``contents``."""
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(contents)
    except OSError as e:
        raise FilesystemError(f"cannot write file: {e.strerror}", path) from e


def read_yaml(path: Path) -> Any:
    try:
        return yaml.safe_load(read_text(path))
    except yaml.YAMLError as e:
        raise MetadataError(f"invalid YAML: {e}", path) from e


def read_image(path: Path) -> ImageInfo:
    """Decode just enough of an image to know its format and size."""
    try:
        with Image.open(path) as img:
            width, height = img.size
            return ImageInfo(format=img.format or "", width=width, height=height)
    except UnidentifiedImageError as e:
        raise UnsupportedImageError("cannot decode image", path) from e
    except OSError as e:
        raise FilesystemError(f"cannot read image: {e}", path) from e


def copy(src: Path, dst: Path):
    """Copy a file, or a directory tree merged into ``dst``."""
    try:
        if src.is_dir():
            shutil.copytree(src, dst, dirs_exist_ok=True)
        else:
            shutil.copy2(src, dst)
    except (OSError, shutil.Error) as e:
        raise FilesystemError(f"cannot copy to {dst}: {e}", src) from e


def copy_or_resize(src: Path, dst: Path, max_size: int | None = None):
    """Copy an image, downsizing it first if its longest edge exceeds ``max_size``."""
    if not max_size:
        copy(src, dst)
        return

    try:
        with Image.open(src) as img:
            if max(img.size) <= max_size:
                resized = None
            else:
                fmt = img.format
                # thumbnail() keeps the aspect ratio and only ever shrinks
                resized = img.copy()
                resized.thumbnail((max_size, max_size), Image.LANCZOS)
            if resized is not None:
                if fmt == "JPEG" and resized.mode not in ("RGB", "L"):
                    resized = resized.convert("RGB")
                resized.save(dst, fmt)
    except UnidentifiedImageError as e:
        raise UnsupportedImageError("cannot decode image", src) from e
    except OSError as e:
        raise FilesystemError(f"cannot resize image to {dst}: {e}", src) from e

    if resized is None:
        copy(src, dst)
