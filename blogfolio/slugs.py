from __future__ import annotations

import re

FALLBACK_SLUG = "untitled-post"

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """Derive a URL-safe slug from a post title.

    No uniqueness check is made: two posts with the same title share a slug.
    """
    slug = _NON_SLUG_CHARS.sub("-", (title or "").lower()).strip("-")
    return slug or FALLBACK_SLUG
