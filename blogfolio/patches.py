"""
Partial-update policy for posts, projects and the admin profile.

Each updatable field is either TRUTHY (overwritten only by a present, truthy
value) or DEFINED (overwritten whenever the key is present, including null
and empty string). Lists are TRUTHY whenever present and not null, so an
empty list clears them.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping


class Overwrite(Enum):
    TRUTHY = "truthy"
    DEFINED = "defined"


_T, _D = Overwrite.TRUTHY, Overwrite.DEFINED

POST_PATCH_POLICY: dict[str, Overwrite] = {
    "title": _T,
    "content": _T,
    "excerpt": _D,
    "category": _T,
    "tags": _T,
    "featured_image": _D,
    "status": _T,
}

PROJECT_PATCH_POLICY: dict[str, Overwrite] = {
    "title": _T,
    "description": _T,
    "short_description": _T,
    "technologies": _T,
    "category": _T,
    "images": _T,
    "featured_image": _T,
    "live_url": _D,
    "github_url": _D,
    "demo_url": _D,
    "featured": _D,
    "status": _T,
    "start_date": _T,
    "end_date": _T,
    "difficulty": _T,
    "highlights": _T,
    "challenges": _D,
    "solutions": _D,
}

PROFILE_PATCH_POLICY: dict[str, Overwrite] = {
    "name": _T,
    "bio": _D,
    "social_links": _T,
}


def _is_truthy(value: Any) -> bool:
    if isinstance(value, (list, dict)):
        return True
    return bool(value)


def select_changes(
    incoming: Mapping[str, Any], policy: Mapping[str, Overwrite]
) -> dict[str, Any]:
    """Return the subset of `incoming` that the policy lets overwrite.

    `incoming` must only contain keys the client actually sent (for pydantic
    models, `model_dump(exclude_unset=True)`).
    """
    changes: dict[str, Any] = {}
    for name, value in incoming.items():
        rule = policy.get(name)
        if rule is None:
            continue
        if rule is Overwrite.DEFINED or (value is not None and _is_truthy(value)):
            changes[name] = value
    return changes
