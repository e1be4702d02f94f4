"""Droplets: staged, runnable artifacts."""

from __future__ import annotations

import builtins

from pydantic import Field

from ..models import Droplet, DropletState, ToOneRelationship
from ..pager import Pager
from ..query import ListOptions
from .base import ResourceClient


class DropletListOptions(ListOptions):
    guids: list[str] = Field(default_factory=list)
    states: list[DropletState] = Field(default_factory=list)
    app_guids: list[str] = Field(default_factory=list)
    space_guids: list[str] = Field(default_factory=list)
    organization_guids: list[str] = Field(default_factory=list)


class DropletPackageListOptions(ListOptions):
    """Filters for the droplets staged from one package."""

    guids: list[str] = Field(default_factory=list)
    states: list[DropletState] = Field(default_factory=list)


class DropletClient(ResourceClient[Droplet, DropletListOptions]):
    path = "/v3/droplets"
    model = Droplet
    options = DropletListOptions
    resource_name = "droplet"

    async def delete(self, guid: str) -> str:
        return await self._delete(guid)

    async def list_for_package(
        self, package_guid: str, opts: DropletPackageListOptions | None = None
    ) -> tuple[builtins.list[Droplet], Pager]:
        return await self._list_page(
            f"/v3/packages/{package_guid}/droplets", opts or DropletPackageListOptions(), Droplet
        )

    async def list_for_package_all(
        self, package_guid: str, opts: DropletPackageListOptions | None = None
    ) -> builtins.list[Droplet]:
        return await self._list_all(
            f"/v3/packages/{package_guid}/droplets", opts or DropletPackageListOptions(), Droplet
        )

    async def get_current_for_app(self, app_guid: str) -> Droplet:
        return await self._get(f"/v3/apps/{app_guid}/droplets/current", Droplet)

    async def set_current_for_app(self, app_guid: str, droplet_guid: str) -> ToOneRelationship:
        """Make ``droplet_guid`` the droplet the app runs on its next start."""
        return await self._patch(
            f"/v3/apps/{app_guid}/relationships/current_droplet",
            ToOneRelationship.to(droplet_guid),
            ToOneRelationship,
        )
