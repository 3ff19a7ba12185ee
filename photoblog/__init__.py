"""
photoblog: build a static photo blog from a folder of image folders.

Each folder under the images root becomes one post page; page templates
(an index, an archive, ...) see the full post list.
"""

from photoblog.config import Config, Layout, read_config
from photoblog.engine import generate
from photoblog.errors import PhotoblogError
from photoblog.model import ImageInfo, Meta, Post, ViewModel

__all__ = [
    "Config",
    "ImageInfo",
    "Layout",
    "Meta",
    "PhotoblogError",
    "Post",
    "ViewModel",
    "generate",
    "read_config",
]
__version__ = "0.3.0"
