"""Small helpers over string lists and string maps.

Throughout this module ``None`` stands for the universal set: a missing list
does not constrain anything, whereas an empty list matches nothing.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping


def union_string_maps(*maps: Mapping[str, str] | None) -> dict[str, str]:
    """Merge all key/value pairs into one dict; the last write wins."""
    result: dict[str, str] = {}
    for mapping in maps:
        if mapping:
            result.update(mapping)
    return result


def string_slice_without(vals: list[str] | None, *remove: str) -> list[str] | None:
    """Return ``vals`` without any of ``remove``.

    ``None`` is returned when ``vals`` is ``None`` or when nothing remains.
    """
    if vals is None:
        return None
    without = [val for val in vals if val not in remove]
    return without or None


def unique_strings(strings: Iterable[str] | None) -> list[str] | None:
    """Return the distinct strings in first-seen order; ``None`` stays ``None``."""
    if strings is None:
        return None
    return list(dict.fromkeys(strings))


def intersect_string_slice(*slices: list[str] | None) -> list[str] | None:
    """Intersect the given lists.

    An empty list always yields ``[]``; ``None`` is the universal set and does
    not constrain the result; with no constraining list the result is ``None``.
    """
    constraining = [s for s in slices if s is not None]
    if not constraining:
        return None
    result = list(constraining[0])
    for other in constraining[1:]:
        allowed = set(result)
        result = [s for s in other if s in allowed]
    return unique_strings(result)


def contains_string(strings: Iterable[str] | None, candidate: str) -> bool:
    """Report whether ``candidate`` is one of ``strings``."""
    return candidate in (strings or ())


def has_any_prefix(s: str, *prefixes: str) -> bool:
    """Report whether ``s`` starts with any of ``prefixes``."""
    return any(s.startswith(prefix) for prefix in prefixes)