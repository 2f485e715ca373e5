"""Option-returning lookups on mappings."""

from __future__ import annotations

from collections.abc import Mapping

from fp_common.option import Nothing, NothingType, Some

__all__ = ['find']

_MISSING = object()


def find[K, V](mapping: Mapping[K, V], key: K) -> Some[V] | NothingType:
    """Look up a key without raising.

    A key that is present maps to Some(value) even when the stored value is
    `None`; a missing key maps to Nothing.

    Examples:
        >>> find({'a': 1}, 'a')
        Some(value=1)
        >>> find({'a': 1}, 'b')
        NothingType()
    """
    value = mapping.get(key, _MISSING)
    if value is _MISSING:
        return Nothing
    return Some(value)  # type: ignore[arg-type]
