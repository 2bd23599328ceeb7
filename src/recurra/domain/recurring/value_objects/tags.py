"""Tag set helpers.

Tags behave like a set: order is irrelevant and two tags that differ only in
case are the same tag. The first spelling seen wins.
"""

from collections.abc import Iterable


def normalize_tags(tags: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for tag in tags:
        cleaned = tag.strip()
        if not cleaned:
            continue
        key = cleaned.casefold()
        if key in seen:
            continue
        seen.add(key)
        result.append(cleaned)
    return result


def merge_tags(existing: Iterable[str], additional: Iterable[str]) -> list[str]:
    return normalize_tags([*existing, *additional])
