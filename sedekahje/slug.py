"""URL slugs for institution names."""

from __future__ import annotations

import re

_DISALLOWED = re.compile(r"[^a-z0-9-]")


def slugify(text: str) -> str:
    """Lower-case, turn spaces into hyphens and drop anything else not ``[a-z0-9-]``."""
    return _DISALLOWED.sub("", text.lower().replace(" ", "-"))