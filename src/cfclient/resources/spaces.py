"""Spaces."""

from __future__ import annotations

import builtins

from pydantic import Field

from ..models import Organization, Space, SpaceCreate, SpaceUpdate, ToOneRelationship, User
from ..pager import Pager
from ..query import ListOptions
from .base import ResourceClient, first_included, validate


class SpaceListOptions(ListOptions):
    guids: list[str] = Field(default_factory=list)
    names: list[str] = Field(default_factory=list)
    organization_guids: list[str] = Field(default_factory=list)
    include: list[str] = Field(default_factory=list)


class UserListOptions(ListOptions):
    guids: list[str] = Field(default_factory=list)
    usernames: list[str] = Field(default_factory=list)
    partial_usernames: list[str] = Field(default_factory=list)
    origins: list[str] = Field(default_factory=list)


class SpaceClient(ResourceClient[Space, SpaceListOptions]):
    path = "/v3/spaces"
    model = Space
    options = SpaceListOptions
    resource_name = "space"

    async def create(self, r: SpaceCreate) -> Space:
        return await self._post(self.path, r, Space)

    async def update(self, guid: str, r: SpaceUpdate) -> Space:
        return await self._patch(f"{self.path}/{guid}", r, Space)

    async def delete(self, guid: str) -> str:
        """Delete the space asynchronously; returns the job GUID."""
        return await self._delete(guid)

    async def get_include_org(self, guid: str) -> tuple[Space, Organization]:
        """Fetch a space together with its parent organization."""
        data = await self._client.get(f"{self.path}/{guid}?include=organization")
        return validate(Space, data), first_included(data, "organizations", Organization, f"Space {guid}")

    async def list_include_orgs(
        self, opts: SpaceListOptions | None = None
    ) -> tuple[builtins.list[Space], builtins.list[Organization], Pager]:
        """One page of spaces plus their parent organizations."""
        opts = (opts or SpaceListOptions()).model_copy(update={"include": ["organization"]})
        spaces, included, pager = await self._list_page_included(
            self.path, opts, Space, {"organizations": Organization}
        )
        return spaces, included["organizations"], pager

    async def list_include_orgs_all(
        self, opts: SpaceListOptions | None = None
    ) -> tuple[builtins.list[Space], builtins.list[Organization]]:
        opts = (opts or SpaceListOptions()).model_copy(update={"include": ["organization"]})
        spaces, included = await self._list_all_included(
            self.path, opts, Space, {"organizations": Organization}
        )
        return spaces, included["organizations"]

    async def list_users(
        self, guid: str, opts: UserListOptions | None = None
    ) -> tuple[builtins.list[User], Pager]:
        """One page of users with any role in the space."""
        return await self._list_page(f"{self.path}/{guid}/users", opts or UserListOptions(), User)

    async def list_users_all(self, guid: str, opts: UserListOptions | None = None) -> builtins.list[User]:
        return await self._list_all(f"{self.path}/{guid}/users", opts or UserListOptions(), User)

    async def assign_isolation_segment(self, guid: str, isolation_segment_guid: str) -> None:
        """Assign an isolation segment; apps only move there once restarted."""
        await self._client.patch(
            f"{self.path}/{guid}/relationships/isolation_segment",
            ToOneRelationship.to(isolation_segment_guid).model_dump(mode="json"),
        )

    async def get_assigned_isolation_segment(self, guid: str) -> str:
        """GUID of the space's isolation segment, or "" if none is assigned."""
        data = await self._client.get(f"{self.path}/{guid}/relationships/isolation_segment")
        return validate(ToOneRelationship, data).guid or ""
