from __future__ import annotations

import os
from pathlib import Path

import pytest
from PIL import Image

from photoblog.config import Config, Layout

INDEX_TEMPLATE = """\
{% for p in posts %}{{ slug(p) }}|{{ p.title_or_default() }}
{% endfor %}"""

POST_TEMPLATE = """\
title={{ post.title_or_default() }}
prev={{ previous.title_or_default() }}
next={{ next.title_or_default() }}
{{ label(post) }}
"""

MACROS_PARTIAL = "{% macro label(post) %}[{{ post.file }}]{% endmacro %}"


def make_image(path: Path, size: tuple[int, int] = (8, 6), mtime: float | None = None) -> Path:
    """Write a small solid image; the format follows the file extension."""
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", size, (200, 120, 40)).save(path)
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


@pytest.fixture
def images_dir(tmp_path: Path) -> Path:
    path = tmp_path / "images"
    path.mkdir()
    return path


@pytest.fixture
def layout_dir(tmp_path: Path) -> Path:
    layout = tmp_path / "layout"
    (layout / "partials").mkdir(parents=True)
    (layout / "static" / "css").mkdir(parents=True)
    (layout / "index.html").write_text(INDEX_TEMPLATE, encoding="utf-8")
    (layout / "post.html").write_text(POST_TEMPLATE, encoding="utf-8")
    (layout / "partials" / "macros.html").write_text(MACROS_PARTIAL, encoding="utf-8")
    (layout / "static" / "css" / "site.css").write_text("body { margin: 0; }\n", encoding="utf-8")
    return layout


@pytest.fixture
def config(tmp_path: Path, images_dir: Path, layout_dir: Path) -> Config:
    return Config(
        title="Test Blog",
        images=str(images_dir),
        output=str(tmp_path / "dist"),
        layout=Layout(
            pages=[str(layout_dir / "index.html")],
            post=str(layout_dir / "post.html"),
            partials=[str(layout_dir / "partials" / "macros.html")],
            statics=[str(layout_dir / "static")],
        ),
    )
