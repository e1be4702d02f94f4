"""Packages: the uploaded source bits of an app."""

from __future__ import annotations

import asyncio
import builtins

from pydantic import Field

from ..models import Package, PackageCreate, PackageState
from ..pager import Pager
from ..polling import PollingOptions
from ..query import ListOptions
from .base import ResourceClient, validate

PACKAGE_SUCCESS_STATES = frozenset({PackageState.READY.value})
PACKAGE_FAILURE_STATES = frozenset({PackageState.FAILED.value, PackageState.EXPIRED.value})


class PackageListOptions(ListOptions):
    guids: list[str] = Field(default_factory=list)
    states: list[PackageState] = Field(default_factory=list)
    types: list[str] = Field(default_factory=list)
    app_guids: list[str] = Field(default_factory=list)
    space_guids: list[str] = Field(default_factory=list)
    organization_guids: list[str] = Field(default_factory=list)


class PackageClient(ResourceClient[Package, PackageListOptions]):
    path = "/v3/packages"
    model = Package
    options = PackageListOptions
    resource_name = "package"

    async def create(self, r: PackageCreate) -> Package:
        return await self._post(self.path, r, Package)

    async def delete(self, guid: str) -> str:
        return await self._delete(guid)

    async def upload_bits(self, guid: str, bits: bytes) -> Package:
        """Upload a zip of the app's source as a multipart ``bits`` field.

        The package moves to PROCESSING_UPLOAD; wait for it with ``poll_ready``.
        """
        files = {"bits": ("application.zip", bits, "application/zip")}
        data = await self._client.post(f"{self.path}/{guid}/upload", files=files)
        return validate(Package, data)

    async def poll_ready(
        self,
        guid: str,
        options: PollingOptions | None = None,
        cancel: asyncio.Event | None = None,
    ) -> str:
        """Wait until the package is READY; FAILED or EXPIRED raise."""

        async def read() -> tuple[str, str | None]:
            pkg = await self.get(guid)
            return pkg.state.value, None

        return await self._poll(
            read, PACKAGE_SUCCESS_STATES, PACKAGE_FAILURE_STATES, options, cancel
        )

    async def list_for_app(
        self, app_guid: str, opts: PackageListOptions | None = None
    ) -> tuple[builtins.list[Package], Pager]:
        return await self._list_page(
            f"/v3/apps/{app_guid}/packages", opts or PackageListOptions(), Package
        )

    async def list_for_app_all(
        self, app_guid: str, opts: PackageListOptions | None = None
    ) -> builtins.list[Package]:
        return await self._list_all(
            f"/v3/apps/{app_guid}/packages", opts or PackageListOptions(), Package
        )
