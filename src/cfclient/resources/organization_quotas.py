"""Organization quotas."""

from __future__ import annotations

from pydantic import Field

from ..models import (
    OrganizationQuota,
    OrganizationQuotaCreate,
    OrganizationQuotaUpdate,
    ToManyRelationship,
)
from ..query import ListOptions
from .base import ResourceClient, validate


class OrganizationQuotaListOptions(ListOptions):
    guids: list[str] = Field(default_factory=list)
    names: list[str] = Field(default_factory=list)
    organization_guids: list[str] = Field(default_factory=list)


class OrganizationQuotaClient(ResourceClient[OrganizationQuota, OrganizationQuotaListOptions]):
    path = "/v3/organization_quotas"
    model = OrganizationQuota
    options = OrganizationQuotaListOptions
    resource_name = "organization quota"

    async def create(self, r: OrganizationQuotaCreate) -> OrganizationQuota:
        return await self._post(self.path, r, OrganizationQuota)

    async def update(self, guid: str, r: OrganizationQuotaUpdate) -> OrganizationQuota:
        return await self._patch(f"{self.path}/{guid}", r, OrganizationQuota)

    async def delete(self, guid: str) -> str:
        return await self._delete(guid)

    async def apply(self, guid: str, org_guids: list[str]) -> list[str]:
        """Apply the quota to organizations.

        Returns:
            GUIDs of every organization the quota now applies to.
        """
        data = await self._client.post(
            f"{self.path}/{guid}/relationships/organizations",
            ToManyRelationship.to(org_guids).model_dump(mode="json"),
        )
        return validate(ToManyRelationship, data).guids
