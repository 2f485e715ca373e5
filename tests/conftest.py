"""Shared pytest fixtures."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

import pytest
from fp_common.runtime import init, reset_config

if TYPE_CHECKING:
    from collections.abc import Generator


class CallCounter:
    """Thread-safe invocation counter for laziness and parallelism checks."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.calls = 0
        self.active = 0
        self.peak = 0

    def hit(self) -> None:
        with self._lock:
            self.calls += 1

    def enter(self) -> None:
        with self._lock:
            self.calls += 1
            self.active += 1
            self.peak = max(self.peak, self.active)

    def leave(self) -> None:
        with self._lock:
            self.active -= 1


@pytest.fixture
def counter() -> CallCounter:
    return CallCounter()


@pytest.fixture
def runtime_config() -> Generator[None]:
    """Pin the default concurrency to 4 for the test, then forget it."""
    init(concurrency=4)
    yield
    reset_config()
