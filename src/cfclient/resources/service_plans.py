"""Service plans offered by service brokers."""

from __future__ import annotations

from pydantic import Field

from ..models import ServicePlan, ServicePlanUpdate
from ..query import ListOptions
from .base import ResourceClient


class ServicePlanListOptions(ListOptions):
    guids: list[str] = Field(default_factory=list)
    names: list[str] = Field(default_factory=list)
    available: bool | None = None
    broker_catalog_ids: list[str] = Field(default_factory=list)
    space_guids: list[str] = Field(default_factory=list)
    organization_guids: list[str] = Field(default_factory=list)
    service_broker_guids: list[str] = Field(default_factory=list)
    service_broker_names: list[str] = Field(default_factory=list)
    service_offering_guids: list[str] = Field(default_factory=list)
    service_offering_names: list[str] = Field(default_factory=list)
    service_instance_guids: list[str] = Field(default_factory=list)
    include: list[str] = Field(default_factory=list)


class ServicePlanClient(ResourceClient[ServicePlan, ServicePlanListOptions]):
    path = "/v3/service_plans"
    model = ServicePlan
    options = ServicePlanListOptions
    resource_name = "service plan"

    async def update(self, guid: str, r: ServicePlanUpdate) -> ServicePlan:
        """Update labels and annotations; nothing else is writable."""
        return await self._patch(f"{self.path}/{guid}", r, ServicePlan)

    async def delete(self, guid: str) -> str:
        return await self._delete(guid)
