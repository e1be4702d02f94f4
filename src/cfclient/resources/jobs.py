"""Jobs track server-side asynchronous operations."""

from __future__ import annotations

import asyncio
import logging

from ..models import Job, JobState
from ..polling import PollingOptions
from .base import BaseClient

logger = logging.getLogger(__name__)

JOB_SUCCESS_STATES = frozenset({JobState.COMPLETE.value})
JOB_FAILURE_STATES = frozenset({JobState.FAILED.value})


class JobClient(BaseClient):
    path = "/v3/jobs"

    async def get(self, guid: str) -> Job:
        return await self._get(f"{self.path}/{guid}", Job)

    async def poll_complete(
        self,
        guid: str,
        options: PollingOptions | None = None,
        cancel: asyncio.Event | None = None,
    ) -> str:
        """Wait for a job to reach COMPLETE.

        An empty ``guid`` means the operation already finished synchronously
        and returns COMPLETE without any request.

        Raises:
            OperationFailedError: The job FAILED; the reason is the detail of
                its first error.
        """
        if not guid:
            logger.debug("No job to wait for, operation completed synchronously")
            return JobState.COMPLETE.value

        async def read() -> tuple[str, str | None]:
            job = await self.get(guid)
            return job.state.value, job.failure_reason

        return await self._poll(read, JOB_SUCCESS_STATES, JOB_FAILURE_STATES, options, cancel)
