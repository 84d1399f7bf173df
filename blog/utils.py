import math
from blog.constants import (
    DANGEROUS_SCHEMES, SAFE_URL_PREFIXES, SAFE_IMAGE_PREFIXES,
    WORDS_PER_MINUTE, ICON_CLASSES, DEFAULT_ICON_CLASS,
)

_ESCAPES = (
    ('&', '&amp;'),
    ('<', '&lt;'),
    ('>', '&gt;'),
    ('"', '&quot;'),
    ("'", '&#039;'),
)


def escape_html(text: str) -> str:
    """Entity-encode the five XSS-relevant characters. Single pass, `&` first."""
    for char, entity in _ESCAPES:
        text = text.replace(char, entity)
    return text


def _has_safe_prefix(candidate, allowed) -> bool:
    if not isinstance(candidate, str):
        return False
    normalized = candidate.strip().lower()
    if normalized.startswith(DANGEROUS_SCHEMES):
        return False
    return normalized.startswith(allowed)


def is_safe_url(url) -> bool:
    """Allow http(s), mailto, site-relative and anchor hrefs; deny everything else."""
    return _has_safe_prefix(url, SAFE_URL_PREFIXES)


def is_safe_image_path(path) -> bool:
    """Allow http(s) and site-relative image sources only."""
    return _has_safe_prefix(path, SAFE_IMAGE_PREFIXES)


def format_date(date_string):
    """Normalize 'YYYY-M-D' to zero-padded 'YYYY-MM-DD'. Unparseable input is returned as-is."""
    try:
        year, month, day = (int(part) for part in str(date_string).split('-'))
    except (TypeError, ValueError):
        return date_string
    return f"{year}-{month:02d}-{day:02d}"


def estimate_read_time(content) -> int:
    """Minutes to read at WORDS_PER_MINUTE, never less than 1."""
    words = len((content or '').split())
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def get_icon_class(icon):
    return ICON_CLASSES.get(icon, DEFAULT_ICON_CLASS)
