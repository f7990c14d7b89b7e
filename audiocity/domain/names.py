"""Domain helpers for name normalization and path-safe keys."""
from __future__ import annotations

import re

_SEPARATORS = re.compile(r"[\\/]")


def normalize_name(value: str) -> str:
    """Strip ':' so that "Song: Title" and "Song Title" share one identity."""
    return value.replace(":", "")


def playlist_key(value: str) -> str:
    """Identity key of a playlist name, used identically when writing and when looking up."""
    return normalize_name(value).strip()


def path_component(value: str) -> str:
    """Normalized name that is safe to use as a single file or directory name."""
    component = _SEPARATORS.sub("_", normalize_name(value)).strip()
    if component in ("", ".", ".."):
        return "_"
    return component


def is_safe_key(value: str | None) -> bool:
    """Return True when value can be used verbatim as a document file name."""
    if not value:
        return False
    if value in (".", ".."):
        return False
    return _SEPARATORS.search(value) is None and "\x00" not in value
