"""Optimistic transaction runner shared by document store implementations.

Subclasses provide begin/commit/rollback; the runner re-executes the whole
callback when commit reports a conflicting concurrent write, with jittered
exponential backoff between attempts. The retry budget is a deadline,
optionally capped by an attempt count.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    stop_after_delay,
    wait_random_exponential,
)

from eventlink.application.interfaces.store import (
    DEFAULT_TRANSACTION_DEADLINE,
    ITransaction,
    TransactionConflictError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TransactionRunner:
    """Mixin implementing run_transaction on top of three store hooks."""

    retry_base_delay: float = 0.01
    retry_max_delay: float = 0.25

    async def _begin_transaction(self) -> Any:
        raise NotImplementedError

    async def _commit_transaction(self, tx: Any) -> None:
        raise NotImplementedError

    async def _rollback_transaction(self, tx: Any) -> None:
        raise NotImplementedError

    async def run_transaction(
        self,
        callback: Callable[[ITransaction], Awaitable[T]],
        *,
        max_attempts: int | None = None,
        deadline: float = DEFAULT_TRANSACTION_DEADLINE,
    ) -> T:
        """Run callback in a transaction; retry on TransactionConflictError.

        Conflicts are retried until deadline seconds have passed since the
        first attempt, or max_attempts attempts were made when given. Any
        other exception raised by callback (e.g. a domain rule) rolls the
        transaction back and propagates without retry.

        Raises:
            TransactionConflictError: When the budget ran out while losing to concurrent writes.
        """
        if max_attempts is not None and max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if deadline <= 0:
            raise ValueError("deadline must be positive")
        stop = stop_after_delay(deadline)
        if max_attempts is not None:
            stop = stop | stop_after_attempt(max_attempts)
        retrying = AsyncRetrying(
            retry=retry_if_exception_type(TransactionConflictError),
            stop=stop,
            wait=wait_random_exponential(
                multiplier=self.retry_base_delay, max=self.retry_max_delay
            ),
            before_sleep=before_sleep_log(logger, logging.DEBUG),
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    tx = await self._begin_transaction()
                    try:
                        result = await callback(tx)
                        await self._commit_transaction(tx)
                    except BaseException:
                        await self._rollback_transaction(tx)
                        raise
                    return result
        except TransactionConflictError:
            logger.warning(
                "Transaction gave up after %s conflicting attempts",
                retrying.statistics.get("attempt_number"),
            )
            raise
        raise AssertionError("retry loop exited without an outcome")
