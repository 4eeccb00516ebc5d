"""Hashing utilities."""

import hashlib


def compute_source_hash(source_url: str) -> str:
    """Fingerprint an article by its canonical URL (dedup key)."""
    return hashlib.sha256(source_url.encode("utf-8")).hexdigest()
