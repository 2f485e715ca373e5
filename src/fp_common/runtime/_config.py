"""Runtime configuration: default concurrency for parallel iteration and logging."""

from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass

import psutil

from fp_common.runtime._logging import configure_logging, get_logger

__all__ = [
    'CONCURRENCY_ENV_VAR',
    'RuntimeConfig',
    'get_config',
    'init',
    'reset_config',
]

CONCURRENCY_ENV_VAR = 'FP_COMMON_CONCURRENCY'

_MIN_CONCURRENCY = 1
_MAX_CONCURRENCY = 256

logger = get_logger(__name__)


@dataclass(frozen=True)
class RuntimeConfig:
    """Configuration shared by the parallel iteration helpers.

    Attributes:
        concurrency: Worker count used when no max degree of parallelism is given.
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = leave logging alone.
    """

    concurrency: int = 4
    log_level: str | None = None


# Global runtime configuration (set by init() or lazily by get_config())
_config: RuntimeConfig | None = None


def _clamp(value: int) -> int:
    return max(_MIN_CONCURRENCY, min(_MAX_CONCURRENCY, value))


def _detect_concurrency() -> int:
    """Detect default concurrency.

    Priority:
    1. FP_COMMON_CONCURRENCY environment variable
    2. Logical CPU count, capped by container CPU limits (cgroups)
    """
    env_value = os.environ.get(CONCURRENCY_ENV_VAR, '').strip()
    if env_value:
        try:
            return _clamp(int(env_value))
        except ValueError:
            logger.warning('Ignoring invalid concurrency setting', env_var=CONCURRENCY_ENV_VAR, value=env_value)

    return _detect_local_concurrency()


def _detect_local_concurrency() -> int:
    """Detect concurrency from local CPU resources, honouring container limits."""
    cores = psutil.cpu_count(logical=True) or 4

    container_limit = _detect_container_cpu_limit()
    if container_limit is not None:
        cores = min(cores, container_limit)

    return _clamp(cores)


def _detect_container_cpu_limit() -> int | None:
    """Detect CPU limit in containerized environments."""
    # cgroups v2
    try:
        content = pathlib.Path('/sys/fs/cgroup/cpu.max').read_text().strip()
        quota, period = content.split()
        if quota != 'max':
            return max(1, int(quota) // int(period))
    except (FileNotFoundError, ValueError, PermissionError):
        pass

    # cgroups v1
    try:
        quota_v1 = int(pathlib.Path('/sys/fs/cgroup/cpu/cpu.cfs_quota_us').read_text().strip())
        period_v1 = int(pathlib.Path('/sys/fs/cgroup/cpu/cpu.cfs_period_us').read_text().strip())
        if quota_v1 > 0:
            return max(1, quota_v1 // period_v1)
    except (FileNotFoundError, ValueError, PermissionError):
        pass

    return None


def init(
    concurrency: int | None = None,
    log_level: str | None = None,
) -> RuntimeConfig:
    """Initialize the runtime configuration.

    Args:
        concurrency: Default worker count for parallel iteration. Auto-detected
            if None. Clamped to [1, 256].
        log_level: Logging level ("DEBUG", "INFO", etc.). None = leave logging alone.

    Returns:
        The RuntimeConfig that was set.

    Example:
        ```python
        from fp_common.runtime import init

        init()  # auto-detect
        init(concurrency=8, log_level='DEBUG')
        ```
    """
    global _config  # noqa: PLW0603

    resolved_concurrency = _detect_concurrency() if concurrency is None else _clamp(concurrency)

    _config = RuntimeConfig(concurrency=resolved_concurrency, log_level=log_level)

    if log_level is not None:
        configure_logging(log_level)

    return _config


def get_config() -> RuntimeConfig:
    """Get the current runtime configuration, initializing defaults on first use."""
    if _config is None:
        return init()
    return _config


def reset_config() -> None:
    """Forget the current configuration; the next get_config() re-detects it."""
    global _config  # noqa: PLW0603
    _config = None
