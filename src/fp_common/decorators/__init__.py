"""Decorators: @safe and @safe_async, @do and @do_async."""

from fp_common.decorators.do import do, do_async
from fp_common.decorators.safe import safe, safe_async

__all__ = [
    'do',
    'do_async',
    'safe',
    'safe_async',
]
