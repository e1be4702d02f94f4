"""Service usage events, the billing feed for service instances."""

from __future__ import annotations

from pydantic import Field

from ..models import ServiceUsageEvent
from ..query import ListOptions
from .base import ResourceClient


class ServiceUsageEventListOptions(ListOptions):
    after_guid: str | None = None
    guids: list[str] = Field(default_factory=list)
    service_instance_types: list[str] = Field(default_factory=list)
    service_offering_guids: list[str] = Field(default_factory=list)


class ServiceUsageEventClient(ResourceClient[ServiceUsageEvent, ServiceUsageEventListOptions]):
    path = "/v3/service_usage_events"
    model = ServiceUsageEvent
    options = ServiceUsageEventListOptions
    resource_name = "service usage event"

    async def purge_and_reseed(self) -> None:
        """Drop every recorded event and reseed one per existing service instance.

        Billing consumers lose any history they have not yet read.
        """
        await self._client.post(f"{self.path}/actions/destructively_purge_all_and_reseed")
