"""Content hashing helpers."""

import hashlib


def content_hash(content: str) -> str:
    """Return the SHA-256 hex digest of the UTF-8 encoded content."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def contents_match(a: str, b: str) -> bool:
    """Tell whether two contents hash to the same value."""
    return content_hash(a) == content_hash(b)