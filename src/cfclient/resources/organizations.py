"""Organizations."""

from __future__ import annotations

from pydantic import Field

from ..models import (
    Domain,
    Organization,
    OrganizationCreate,
    OrganizationUpdate,
    OrganizationUsageSummary,
    ToOneRelationship,
)
from ..query import ListOptions
from .base import ResourceClient, validate


class OrganizationListOptions(ListOptions):
    guids: list[str] = Field(default_factory=list)
    names: list[str] = Field(default_factory=list)


class OrganizationClient(ResourceClient[Organization, OrganizationListOptions]):
    path = "/v3/organizations"
    model = Organization
    options = OrganizationListOptions
    resource_name = "organization"

    async def create(self, r: OrganizationCreate) -> Organization:
        return await self._post(self.path, r, Organization)

    async def update(self, guid: str, r: OrganizationUpdate) -> Organization:
        return await self._patch(f"{self.path}/{guid}", r, Organization)

    async def delete(self, guid: str) -> str:
        """Delete the organization; returns the GUID of the deletion job."""
        return await self._delete(guid)

    async def list_for_isolation_segment_all(
        self, isolation_segment_guid: str, opts: OrganizationListOptions | None = None
    ) -> list[Organization]:
        """All organizations entitled to an isolation segment."""
        return await self._list_all(
            f"/v3/isolation_segments/{isolation_segment_guid}/organizations",
            opts or OrganizationListOptions(),
            Organization,
        )

    async def get_default_isolation_segment(self, guid: str) -> str:
        """GUID of the org's default isolation segment, or "" if unset."""
        data = await self._client.get(f"{self.path}/{guid}/relationships/default_isolation_segment")
        return validate(ToOneRelationship, data).guid or ""

    async def assign_default_isolation_segment(self, guid: str, isolation_segment_guid: str) -> None:
        await self._client.patch(
            f"{self.path}/{guid}/relationships/default_isolation_segment",
            ToOneRelationship.to(isolation_segment_guid).model_dump(mode="json"),
        )

    async def get_default_domain(self, guid: str) -> Domain:
        return await self._get(f"{self.path}/{guid}/domains/default", Domain)

    async def get_usage_summary(self, guid: str) -> OrganizationUsageSummary:
        data = await self._client.get(f"{self.path}/{guid}/usage_summary")
        return validate(OrganizationUsageSummary, data.get("usage") or {})
