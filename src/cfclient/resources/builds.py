"""Builds: staging a package into a droplet."""

from __future__ import annotations

import asyncio

from pydantic import Field

from ..models import Build, BuildCreate, BuildState
from ..polling import PollingOptions
from ..query import ListOptions
from .base import ResourceClient

BUILD_SUCCESS_STATES = frozenset({BuildState.STAGED.value})
BUILD_FAILURE_STATES = frozenset({BuildState.FAILED.value})


class BuildListOptions(ListOptions):
    states: list[BuildState] = Field(default_factory=list)
    app_guids: list[str] = Field(default_factory=list)
    package_guids: list[str] = Field(default_factory=list)


class BuildClient(ResourceClient[Build, BuildListOptions]):
    path = "/v3/builds"
    model = Build
    options = BuildListOptions
    resource_name = "build"

    async def create(self, r: BuildCreate) -> Build:
        """Start staging a package. The build begins in STAGING."""
        return await self._post(self.path, r, Build)

    async def delete(self, guid: str) -> str:
        return await self._delete(guid)

    async def poll_staged(
        self,
        guid: str,
        options: PollingOptions | None = None,
        cancel: asyncio.Event | None = None,
    ) -> str:
        """Wait until the build is STAGED.

        Raises:
            OperationFailedError: The build FAILED; the reason is the staging
                error reported by the server.
        """

        async def read() -> tuple[str, str | None]:
            build = await self.get(guid)
            return build.state.value, build.error

        return await self._poll(read, BUILD_SUCCESS_STATES, BUILD_FAILURE_STATES, options, cancel)
