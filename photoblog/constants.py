"""Defaults shared across the build."""

from pathlib import Path

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp")

# metadata sidecar read from each post folder
DISCOVERY_FILE_META = "meta.yml"

OUTPUT_FILE_INDEX = "index.html"

DEFAULT_IMAGES = Path("images")
DEFAULT_OUTPUT = Path("dist")

DEFAULT_LAYOUT = Path("layout")
DEFAULT_PAGES = (DEFAULT_LAYOUT / "index.html",)
DEFAULT_POST = DEFAULT_LAYOUT / "post.html"
DEFAULT_PARTIALS_GLOB = "partials/*.html"
DEFAULT_STATIC = DEFAULT_LAYOUT / "static"

# searched in order when no --config is given
CONFIG_FILENAMES = (
    "photoblog.yml",
    "photoblog.yaml",
    "photoblog.json",
    "config.yml",
    "config.yaml",
    "config.json",
)

SLUG_MAX_LEN = 60
SLUG_FALLBACK = "post"
