"""fp-common: Option, Result and Either for Python 3.13+.

Expected failures travel as values instead of exceptions. The package also
provides Option- and Result-aware combinators over sync and async
iterables, bounded parallel iteration, and cooperative cancellation.

Flat imports (preferred):
    from fp_common import Option, Some, Nothing, Result, Success, Failure, Error
    from fp_common import choose, pick, traverse_result, iter_parallel, safe

Submodule imports (for organization):
    from fp_common.option import Some, Nothing, Option
    from fp_common.result import Success, Failure, Result
    from fp_common.async_ import async_traverse_result
    from fp_common.runtime import CancellationToken, init
"""

# Async combinators
from fp_common.async_ import (
    AsyncReiterable,
    async_choose,
    async_collect,
    async_head,
    async_iter_all,
    async_iter_parallel,
    async_pick,
    async_single_or_none,
    async_tap,
    async_traverse_option,
    async_traverse_result,
    async_unzip,
)

# Decorators
from fp_common.decorators import do, do_async, safe, safe_async
from fp_common.either import Either, Left, Right
from fp_common.error import Error, ErrorLike, Exceptional

# Sync combinators
from fp_common.iterables import (
    Reiterable,
    choose,
    head,
    iter_all,
    iter_parallel,
    pick,
    single_or_none,
    tap,
    traverse_option,
    traverse_result,
    unzip,
)
from fp_common.mapping import find
from fp_common.option import Nothing, NothingType, Option, Some, from_optional
from fp_common.result import Failure, Result, Success, failure, success

# Runtime
from fp_common.runtime import CancellationToken, CancelledError, OperationFailedError
from fp_common.unit import UnitType, unit

__all__ = [
    # Unit
    'UnitType',
    'unit',
    # Error
    'Error',
    'ErrorLike',
    'Exceptional',
    # Option
    'Nothing',
    'NothingType',
    'Option',
    'Some',
    'from_optional',
    # Result
    'Failure',
    'Result',
    'Success',
    'failure',
    'success',
    # Either
    'Either',
    'Left',
    'Right',
    # Sync combinators
    'Reiterable',
    'choose',
    'head',
    'iter_all',
    'iter_parallel',
    'pick',
    'single_or_none',
    'tap',
    'traverse_option',
    'traverse_result',
    'unzip',
    # Async combinators
    'AsyncReiterable',
    'async_choose',
    'async_collect',
    'async_head',
    'async_iter_all',
    'async_iter_parallel',
    'async_pick',
    'async_single_or_none',
    'async_tap',
    'async_traverse_option',
    'async_traverse_result',
    'async_unzip',
    # Mapping
    'find',
    # Decorators
    'do',
    'do_async',
    'safe',
    'safe_async',
    # Runtime
    'CancellationToken',
    'CancelledError',
    'OperationFailedError',
]
