"""Async counterparts of the iterable combinators."""

from fp_common.async_.itertools import (
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

__all__ = [
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
]
