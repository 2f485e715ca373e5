"""Unit type: the value carried by computations that only have effects."""

from __future__ import annotations

import msgspec

__all__ = ['UnitType', 'unit']


class UnitType(msgspec.Struct, frozen=True, gc=False):
    """Zero-information marker value.

    Use the `unit` singleton where a value is required but carries no data,
    e.g. `Result[UnitType]` for an operation that can fail but returns
    nothing useful. All instances compare equal.

    Examples:
        >>> unit == UnitType()
        True
        >>> str(unit)
        '()'
    """

    def __str__(self) -> str:
        return '()'


unit: UnitType = UnitType()
"""Singleton Unit value."""
