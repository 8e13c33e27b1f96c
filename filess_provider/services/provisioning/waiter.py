"""
State-change waiter for asynchronous backend provisioning.

Repeatedly calls a refresh coroutine that reports ``(result, state)`` until
the state reaches a target, leaves the pending set, or the timeout elapses.
Sleep and clock are injectable so the timing can be driven by tests.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Tuple

from .base import ProvisioningTimeoutError, UnexpectedStateError

logger = logging.getLogger(__name__)

RefreshFunc = Callable[[], Awaitable[Tuple[Any, str]]]
SleepFunc = Callable[[float], Awaitable[None]]
ClockFunc = Callable[[], float]


@dataclass(frozen=True)
class WaitConfig:
    """
    Timing and state sets for a wait.

    Attributes:
        pending: States that mean "keep polling"
        target: States that end the wait successfully
        delay: Seconds to wait before the first refresh
        min_interval: Shortest sleep between refreshes
        max_interval: Longest sleep between refreshes
        timeout: Overall limit in seconds, delay included
    """
    pending: Tuple[str, ...]
    target: Tuple[str, ...]
    delay: float = 5.0
    min_interval: float = 5.0
    max_interval: float = 10.0
    timeout: float = 1800.0


class StateChangeWaiter:
    """Polls a refresh function until a target state is reached."""

    def __init__(
        self,
        refresh: RefreshFunc,
        config: WaitConfig,
        sleep: Optional[SleepFunc] = None,
        clock: Optional[ClockFunc] = None,
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
    ):
        self.refresh = refresh
        self.config = config
        self._sleep = sleep or asyncio.sleep
        self._clock = clock or time.monotonic
        self.resource_type = resource_type
        self.resource_id = resource_id
        self.last_state = ""
        self.polls = 0

    def _timeout_error(self) -> ProvisioningTimeoutError:
        logger.error(
            f"Timed out after {self.config.timeout:g}s waiting for "
            f"{self.resource_type} {self.resource_id} (last state: {self.last_state or 'none'})"
        )
        return ProvisioningTimeoutError(
            self.config.timeout,
            last_state=self.last_state,
            resource_type=self.resource_type,
            resource_id=self.resource_id,
        )

    def _next_interval(self, previous: float) -> float:
        if previous <= 0:
            return self.config.min_interval
        ceiling = max(self.config.max_interval, self.config.min_interval)
        return min(previous * 2, ceiling)

    async def wait(self) -> Any:
        """
        Run the wait loop.

        Returns:
            The result reported alongside the first target state

        Raises:
            ProvisioningTimeoutError: If the timeout elapses first
            UnexpectedStateError: If refresh reports an unknown state
            Exception: Anything raised by refresh, unchanged
        """
        deadline = self._clock() + self.config.timeout

        if self.config.delay > 0:
            remaining = deadline - self._clock()
            await self._sleep(min(self.config.delay, max(remaining, 0)))

        interval = 0.0
        while True:
            if self._clock() >= deadline:
                raise self._timeout_error()

            result, state = await self.refresh()
            self.polls += 1
            self.last_state = state

            if state in self.config.target:
                logger.debug(f"{self.resource_type} {self.resource_id} reached state '{state}'")
                return result

            if state not in self.config.pending:
                raise UnexpectedStateError(
                    state,
                    list(self.config.target),
                    resource_type=self.resource_type,
                    resource_id=self.resource_id,
                )

            interval = self._next_interval(interval)
            remaining = deadline - self._clock()
            if remaining <= 0:
                raise self._timeout_error()

            logger.debug(
                f"Waiting for {self.resource_type} {self.resource_id}: state '{state}', "
                f"next check in {min(interval, remaining):.1f}s"
            )
            await self._sleep(min(interval, remaining))
