# weatherlink: client for the Davis WeatherLink v2 API
# Copyright (C) 2025 Ruaraidh Dobson, South London Scientific

# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.

# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Function decorators for cross-cutting concerns.

The client's endpoint methods are wrapped with ``with_logging`` so every
call is traced the same way without cluttering the request code. Nothing
here retries or swallows errors: failures are logged and re-raised.
"""

import logging
import time
from functools import wraps
from typing import Callable, TypeVar

# Type variable for generic function signatures
F = TypeVar("F", bound=Callable)


def with_logging(logger_name: str | None = None) -> Callable[[F], F]:
    """
    Decorator to log function entry, exit and failure.

    Calls and completions are logged at DEBUG with the elapsed time. Errors
    are logged at WARNING before being re-raised unchanged. Argument values
    are never logged.

    Args:
        logger_name: Name of logger to use. If None, uses the module name.

    Example:
        >>> @with_logging("weatherlink.client")
        ... def stations(self, ids=None):
        ...     ...
    """

    def decorator(func: F) -> F:
        func_logger = logging.getLogger(logger_name or func.__module__)

        @wraps(func)
        def wrapper(*args, **kwargs):
            func_logger.debug(
                f"Calling {func.__name__}", extra={"function": func.__name__}
            )
            started = time.perf_counter()

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                func_logger.warning(
                    f"Error in {func.__name__}: {e}",
                    extra={
                        "function": func.__name__,
                        "error_type": type(e).__name__,
                    },
                )
                raise

            elapsed_ms = (time.perf_counter() - started) * 1000
            func_logger.debug(
                f"Completed {func.__name__} in {elapsed_ms:.0f} ms",
                extra={"function": func.__name__, "elapsed_ms": elapsed_ms},
            )
            return result

        return wrapper

    return decorator
