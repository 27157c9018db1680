"""Retry loop for individual filesystem operations."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, TypeVar

from .infrastructure.logger import logger

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")


def run_with_retry(
    operation: Callable[[], T],
    retry_count: int = 0,
    *,
    delay_s: float = 0.0,
    description: str = "operation",
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Run ``operation``, re-attempting it up to ``retry_count`` more times on OSError.

    The last OSError is re-raised once the attempts are used up.
    """
    if retry_count < 0:
        raise ValueError(f"retry_count must be >= 0, got {retry_count}")

    attempt = 0
    while True:
        try:
            return operation()
        except OSError as err:
            if attempt >= retry_count:
                raise
            attempt += 1
            logger.warning(
                "Copy operation failed, retrying",
                operation=description,
                attempt=attempt,
                retry_count=retry_count,
                error=str(err),
            )
            if delay_s > 0:
                sleep(delay_s)
