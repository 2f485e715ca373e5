"""Runtime support: cancellation, configuration, logging and the parallel worker pool.

Example:
    ```python
    from fp_common.runtime import CancellationToken, init

    init(concurrency=8, log_level='DEBUG')
    token = CancellationToken()
    ```
"""

from fp_common.runtime._config import (
    CONCURRENCY_ENV_VAR,
    RuntimeConfig,
    get_config,
    init,
    reset_config,
)
from fp_common.runtime._logging import LOGGER_NAME, configure_logging, get_logger
from fp_common.runtime.cancellation import CancellationToken
from fp_common.runtime.errors import Cancelled, CancelledError, OperationFailedError
from fp_common.runtime.parallel import resolve_parallelism, run_parallel

__all__ = [
    # Config
    'CONCURRENCY_ENV_VAR',
    'RuntimeConfig',
    'get_config',
    'init',
    'reset_config',
    # Logging
    'LOGGER_NAME',
    'configure_logging',
    'get_logger',
    # Cancellation
    'CancellationToken',
    # Errors
    'Cancelled',
    'CancelledError',
    'OperationFailedError',
    # Worker pool
    'resolve_parallelism',
    'run_parallel',
]
