"""Tests for the post model."""

from datetime import datetime, timezone

import pytest

from photoblog.config import Config
from photoblog.model import ImageInfo, Meta, Post, ViewModel


def _post(**kwargs) -> Post:
    defaults = {
        "original": "/images/sunset/DSC_0042.jpg",
        "file": "DSC_0042.jpg",
        "folder": "sunset",
        "image": ImageInfo(format="JPEG", width=4, height=3),
    }
    defaults.update(kwargs)
    return Post(**defaults)


class TestTitle:
    def test_title_from_meta(self):
        post = _post(meta=Meta(title="Harbor at dusk"))
        assert post.title_or_default() == "Harbor at dusk"

    def test_title_falls_back_to_folder(self):
        assert _post().title_or_default() == "sunset"

    def test_title_falls_back_to_file_stem(self):
        post = _post(folder="")
        assert post.title_or_default() == "DSC_0042"

    def test_empty_post_has_empty_title(self):
        assert Post().title_or_default() == ""


class TestSlug:
    def test_slug_from_title(self):
        post = _post(meta=Meta(title="Harbor at Dusk!"))
        assert post.slug() == "harbor-at-dusk"

    def test_slug_is_deterministic(self):
        post = _post(meta=Meta(title="Café à Paris"))
        assert {post.slug() for _ in range(5)} == {"cafe-a-paris"}

    def test_reserved_title_slug_uses_folder(self):
        post = _post(meta=Meta(title="Static"), folder="beach-day")
        assert post.slug(reserved={"static", "index.html"}) == "beach-day"

    def test_reserved_names_compare_case_insensitively(self):
        post = _post(meta=Meta(title="Assets"), folder="beach-day")
        assert post.slug(reserved={"ASSETS"}) == "beach-day"

    def test_slug_without_usable_text(self):
        post = _post(meta=Meta(title="???"), folder="!!!")
        assert post.slug() == "post"

    def test_slug_strips_path_traversal(self):
        post = _post(meta=Meta(title="../../etc/passwd"))
        assert "/" not in post.slug()
        assert ".." not in post.slug()


class TestValidity:
    def test_discovered_post_is_valid(self):
        assert _post().is_valid()

    def test_post_without_image_info_is_invalid(self):
        assert not _post(image=ImageInfo()).is_valid()

    def test_empty_post_is_zero(self):
        assert Post().is_zero()
        assert not _post().is_zero()

    def test_post_is_frozen(self):
        with pytest.raises(AttributeError):
            _post().original = "elsewhere.jpg"


class TestImageInfo:
    def test_orientation(self):
        assert ImageInfo("PNG", 4, 3).is_landscape
        assert ImageInfo("PNG", 3, 4).is_portrait
        assert ImageInfo("PNG", 4, 2).aspect_ratio == 2.0

    def test_zero_image(self):
        assert ImageInfo().is_zero()
        assert ImageInfo().aspect_ratio == 0.0


class TestViewModel:
    def test_context_defaults_to_empty_neighbors(self):
        posted = datetime(2020, 1, 2, tzinfo=timezone.utc)
        post = _post(meta=Meta(posted=posted))
        view = ViewModel(config=Config(), posts=(post,), post=post)

        context = view.as_context()

        assert context["post"] is post
        assert context["previous"].is_zero()
        assert context["next"].is_zero()
        assert context["slug"](post) == "sunset"
