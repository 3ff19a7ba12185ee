"""Site configuration and the YAML/JSON loader."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from photoblog import constants
from photoblog.errors import ConfigError

_TEXT_FIELDS = ("title", "author", "base_url", "images", "output", "meta_file", "log_level")


@dataclass
class Layout:
    """Template and asset paths. Empty values fall back to the defaults."""

    pages: list[str] = field(default_factory=list)
    post: str = ""
    partials: list[str] = field(default_factory=list)
    statics: list[str] = field(default_factory=list)

    def pages_or_default(self) -> list[Path]:
        if self.pages:
            return [Path(p) for p in self.pages]
        return list(constants.DEFAULT_PAGES)

    def post_or_default(self) -> Path:
        return Path(self.post) if self.post else constants.DEFAULT_POST

    def partials_or_default(self) -> list[Path]:
        if self.partials:
            return [Path(p) for p in self.partials]
        return sorted(constants.DEFAULT_LAYOUT.glob(constants.DEFAULT_PARTIALS_GLOB))

    def statics_or_default(self) -> list[Path]:
        if self.statics:
            return [Path(p) for p in self.statics]
        if constants.DEFAULT_STATIC.is_dir():
            return [constants.DEFAULT_STATIC]
        return []


@dataclass
class Config:
    title: str = ""
    author: str = ""
    base_url: str = ""
    images: str = ""
    output: str = ""
    meta_file: str = ""
    image_extensions: list[str] = field(default_factory=list)
    # longest edge, in pixels, of copied images; None copies originals as-is
    max_image_size: int | None = None
    log_level: str = "INFO"
    layout: Layout = field(default_factory=Layout)

    def images_or_default(self) -> Path:
        return Path(self.images) if self.images else constants.DEFAULT_IMAGES

    def output_or_default(self) -> Path:
        return Path(self.output) if self.output else constants.DEFAULT_OUTPUT

    def meta_file_or_default(self) -> str:
        return self.meta_file or constants.DISCOVERY_FILE_META

    def image_extensions_or_default(self) -> tuple[str, ...]:
        if not self.image_extensions:
            return constants.IMAGE_EXTENSIONS
        return tuple(
            ext.lower() if ext.startswith(".") else f".{ext.lower()}"
            for ext in self.image_extensions
        )

    def reserved_names(self) -> set[str]:
        """Output names a post slug must not take over."""
        names = {p.name for p in self.layout.pages_or_default()}
        names.update(p.name for p in self.layout.statics_or_default())
        return names

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        """Build a config from a parsed mapping, ignoring unknown keys."""
        layout_data = data.get("layout") or {}
        if not isinstance(layout_data, dict):
            raise ConfigError(f"'layout' must be a mapping, got {type(layout_data).__name__}")

        known = {f.name for f in fields(cls)} - {"layout"}
        # empty keys fall back to the defaults
        values = {k: v for k, v in data.items() if k in known and v is not None}
        layout_known = {f.name for f in fields(Layout)}
        layout_values = {k: v for k, v in layout_data.items() if k in layout_known and v is not None}

        for key in _TEXT_FIELDS:
            _check_text(values.get(key), key)
        _check_text(layout_values.get("post"), "layout.post")
        layout = Layout(**layout_values)

        for key in ("pages", "partials", "statics"):
            value = getattr(layout, key)
            if isinstance(value, str):
                value = [value]
            _check_list(value, f"layout.{key}")
            setattr(layout, key, value)
        if isinstance(values.get("image_extensions"), str):
            values["image_extensions"] = values["image_extensions"].split()
        if "image_extensions" in values:
            _check_list(values["image_extensions"], "image_extensions")

        max_size = values.get("max_image_size")
        # bool is an int subclass; 'true' is not a size
        if max_size is not None and (
            isinstance(max_size, bool) or not isinstance(max_size, int) or max_size <= 0
        ):
            raise ConfigError(f"'max_image_size' must be a positive integer, got {max_size!r}")

        return cls(layout=layout, **values)


def _check_text(value: Any, name: str):
    if value is not None and not isinstance(value, str):
        raise ConfigError(f"'{name}' must be a string, got {type(value).__name__}")


def _check_list(value: Any, name: str):
    if not isinstance(value, list):
        raise ConfigError(f"'{name}' must be a list, got {type(value).__name__}")
    for item in value:
        if not isinstance(item, str):
            raise ConfigError(f"'{name}' entries must be strings, got {type(item).__name__}")


def load_config(path: Path) -> Config:
    """Parse a YAML (or JSON) config file."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML: {e}", path) from e
    except OSError as e:
        raise ConfigError(f"cannot read config: {e.strerror}", path) from e

    if not isinstance(data, dict):
        raise ConfigError(
            f"config root must be a mapping, got {type(data).__name__}", path
        )
    return Config.from_dict(data)


def read_config(path: str | Path | None = None, search_dir: Path | None = None) -> tuple[Config, str]:
    """Load the config and return it with the path it was read from.

    With no explicit path the known config filenames are tried in
    ``search_dir`` (the working directory by default); when none exists the
    defaults are returned with an empty path.
    """
    if path:
        config_path = Path(path)
        if not config_path.is_file():
            raise ConfigError("config file not found", config_path)
        return load_config(config_path), str(config_path)

    search_dir = search_dir if search_dir is not None else Path.cwd()
    for name in constants.CONFIG_FILENAMES:
        candidate = search_dir / name
        if candidate.is_file():
            return load_config(candidate), str(candidate)
    return Config(), ""
