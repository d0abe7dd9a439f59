from __future__ import annotations


def normalize_query(value: str | None) -> str:
    return (value or "").strip().lower()


def tokenize(value: str) -> list[str]:
    """Split a normalized query into words.

    Duplicates are kept on purpose: a repeated word is scored once per
    occurrence.
    """
    if not value:
        return []
    return value.split()
