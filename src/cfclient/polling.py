"""Waiting on asynchronous Cloud Controller operations.

Jobs, package processing, staging and deployments only report progress
through their state field, so the client re-reads the resource until it
reaches a terminal state, the deadline passes, or the caller cancels.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Collection

from pydantic import BaseModel, Field

from .config import DEFAULT_POLL_INTERVAL, DEFAULT_POLL_TIMEOUT
from .exceptions import OperationFailedError, PollCancelledError, PollTimeoutError

logger = logging.getLogger(__name__)

# Returns the current (state, failure_reason) of the watched resource
StateReader = Callable[[], Awaitable[tuple[str, str | None]]]


class PollingOptions(BaseModel):
    """How long and how often to poll."""

    timeout: float = Field(
        default_factory=lambda: DEFAULT_POLL_TIMEOUT,
        gt=0,
        description="Seconds before giving up",
    )
    check_interval: float = Field(
        default_factory=lambda: DEFAULT_POLL_INTERVAL,
        gt=0,
        description="Seconds between state reads",
    )


async def _wait(interval: float, cancel: asyncio.Event | None) -> None:
    """Sleep for ``interval``, waking early if ``cancel`` is set."""
    if cancel is None:
        await asyncio.sleep(interval)
        return
    try:
        await asyncio.wait_for(cancel.wait(), timeout=interval)
    except asyncio.TimeoutError:
        return
    raise PollCancelledError()


async def poll(
    fetch_state: StateReader,
    success_states: Collection[str],
    failure_states: Collection[str],
    *,
    interval: float,
    timeout: float,
    cancel: asyncio.Event | None = None,
) -> str:
    """Poll until the resource reaches a terminal state.

    The first read happens immediately, later reads follow each ``interval``.
    A wait never runs past the deadline, and the deadline is checked before
    reading again: with interval=1 and timeout=2.5 there are three reads and
    the timeout is raised at t=2.5; with interval=3 and timeout=0.2 it is
    raised at t=0.2 after a single read.

    Args:
        fetch_state: Returns the current ``(state, reason)``.
        success_states: States that end polling successfully.
        failure_states: States that end polling with an error.
        interval: Seconds between reads.
        timeout: Seconds before giving up.
        cancel: Optional event; setting it aborts the wait promptly.

    Returns:
        The terminal success state that was reached.

    Raises:
        OperationFailedError: A failure state was read.
        PollTimeoutError: No terminal state before the deadline.
        PollCancelledError: ``cancel`` was set.
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    reads = 0

    while True:
        if cancel is not None and cancel.is_set():
            raise PollCancelledError()

        state, reason = await fetch_state()
        reads += 1
        logger.debug(f"Poll read {reads}: state={state}")

        if state in failure_states:
            logger.info(f"Operation failed in state {state}: {reason}")
            raise OperationFailedError(state, reason)
        if state in success_states:
            logger.info(f"Operation reached {state} after {reads} read(s)")
            return state

        remaining = deadline - loop.time()
        if remaining > 0:
            await _wait(min(interval, remaining), cancel)
        if remaining <= interval or loop.time() >= deadline:
            raise PollTimeoutError(timeout, state)


async def poll_with_options(
    fetch_state: StateReader,
    success_states: Collection[str],
    failure_states: Collection[str],
    options: PollingOptions | None = None,
    cancel: asyncio.Event | None = None,
) -> str:
    """``poll`` driven by a PollingOptions instance (defaults when None)."""
    options = options or PollingOptions()
    return await poll(
        fetch_state,
        success_states,
        failure_states,
        interval=options.check_interval,
        timeout=options.timeout,
        cancel=cancel,
    )
