"""Deployments: zero-downtime rollout of a droplet or revision."""

from __future__ import annotations

import asyncio

from pydantic import Field

from ..models import Deployment, DeploymentCreate, DeploymentStatusReason, DeploymentStatusValue
from ..polling import PollingOptions
from ..query import ListOptions
from .base import ResourceClient

DEPLOYMENT_SUCCESS_STATES = frozenset({DeploymentStatusReason.DEPLOYED.value})
DEPLOYMENT_FAILURE_STATES = frozenset(
    {DeploymentStatusReason.CANCELED.value, DeploymentStatusReason.SUPERSEDED.value}
)


class DeploymentListOptions(ListOptions):
    app_guids: list[str] = Field(default_factory=list)
    states: list[str] = Field(default_factory=list)
    status_reasons: list[DeploymentStatusReason] = Field(default_factory=list)
    status_values: list[DeploymentStatusValue] = Field(default_factory=list)


def deployment_state(deployment: Deployment) -> str:
    """Collapse a deployment's status into one pollable state.

    A finalized deployment is represented by its reason (DEPLOYED, CANCELED,
    SUPERSEDED); an active one by ACTIVE.
    """
    status = deployment.status
    if status.value == DeploymentStatusValue.FINALIZED:
        return status.reason
    return status.value.value


class DeploymentClient(ResourceClient[Deployment, DeploymentListOptions]):
    path = "/v3/deployments"
    model = Deployment
    options = DeploymentListOptions
    resource_name = "deployment"

    async def create(self, r: DeploymentCreate) -> Deployment:
        return await self._post(self.path, r, Deployment)

    async def cancel(self, guid: str) -> None:
        """Roll back to the previous droplet or revision."""
        await self._client.post(f"{self.path}/{guid}/actions/cancel")

    async def poll_deployed(
        self,
        guid: str,
        options: PollingOptions | None = None,
        cancel: asyncio.Event | None = None,
    ) -> str:
        """Wait until the deployment finalizes as DEPLOYED.

        Raises:
            OperationFailedError: The deployment was CANCELED or SUPERSEDED.
        """

        async def read() -> tuple[str, str | None]:
            deployment = await self.get(guid)
            state = deployment_state(deployment)
            return state, deployment.status.details.get("error")

        return await self._poll(
            read, DEPLOYMENT_SUCCESS_STATES, DEPLOYMENT_FAILURE_STATES, options, cancel
        )
