"""URL and filesystem safe slugs for post folders."""

from unicodedata import normalize

from pymdownx.slugs import slugify as _md_slugify

from photoblog.constants import SLUG_MAX_LEN

_slugify_lower = _md_slugify(case="lower", separator="-")


def slugify(text: str | None, max_len: int = SLUG_MAX_LEN) -> str:
    """Convert text to an ASCII, lowercase, hyphen separated slug.

    Returns an empty string when nothing survives, so callers can choose
    their own fallback.

        >>> slugify("Sunset over the Bay!")
        'sunset-over-the-bay'
        >>> slugify("Café à Paris")
        'cafe-a-paris'
        >>> slugify("../../etc/passwd")
        'etcpasswd'
    """
    if not text:
        return ""

    normalized = normalize("NFKD", str(text)).encode("ascii", "ignore").decode("ascii")
    slug = _slugify_lower(normalized, sep="-")
    if len(slug) > max_len:
        slug = slug[:max_len].rstrip("-")
    return slug
