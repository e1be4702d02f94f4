"""Isolation segments and their org/space relationships."""

from __future__ import annotations

from pydantic import Field

from ..models import (
    IsolationSegment,
    IsolationSegmentCreate,
    IsolationSegmentUpdate,
    ToManyRelationship,
)
from ..query import ListOptions
from .base import ResourceClient, validate


class IsolationSegmentListOptions(ListOptions):
    guids: list[str] = Field(default_factory=list)
    names: list[str] = Field(default_factory=list)
    organization_guids: list[str] = Field(default_factory=list)


class IsolationSegmentClient(ResourceClient[IsolationSegment, IsolationSegmentListOptions]):
    path = "/v3/isolation_segments"
    model = IsolationSegment
    options = IsolationSegmentListOptions
    resource_name = "isolation segment"

    async def create(self, r: IsolationSegmentCreate) -> IsolationSegment:
        return await self._post(self.path, r, IsolationSegment)

    async def update(self, guid: str, r: IsolationSegmentUpdate) -> IsolationSegment:
        return await self._patch(f"{self.path}/{guid}", r, IsolationSegment)

    async def delete(self, guid: str) -> None:
        """Delete the segment. The server deletes it synchronously."""
        await self._delete(guid)

    async def entitle_orgs(self, guid: str, org_guids: list[str]) -> ToManyRelationship:
        """Entitle organizations to the segment; returns all entitled orgs."""
        data = await self._client.post(
            f"{self.path}/{guid}/relationships/organizations",
            ToManyRelationship.to(org_guids).model_dump(mode="json"),
        )
        return validate(ToManyRelationship, data)

    async def revoke_org(self, guid: str, org_guid: str) -> None:
        await self._client.delete(f"{self.path}/{guid}/relationships/organizations/{org_guid}")

    async def list_org_relationships(self, guid: str) -> list[str]:
        """GUIDs of the organizations entitled to the segment."""
        data = await self._client.get(f"{self.path}/{guid}/relationships/organizations")
        return validate(ToManyRelationship, data).guids

    async def list_space_relationships(self, guid: str) -> list[str]:
        """GUIDs of the spaces assigned to the segment."""
        data = await self._client.get(f"{self.path}/{guid}/relationships/spaces")
        return validate(ToManyRelationship, data).guids
