"""Revisions: snapshots of an app's code and configuration."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from ..models import Revision, RevisionUpdate
from ..query import ListOptions
from .base import BaseClient


class RevisionListOptions(ListOptions):
    versions: list[int] = Field(default_factory=list)


class RevisionClient(BaseClient):
    """Revisions have no top-level collection; they are listed per app."""

    path = "/v3/revisions"

    async def get(self, guid: str) -> Revision:
        return await self._get(f"{self.path}/{guid}", Revision)

    async def update(self, guid: str, r: RevisionUpdate) -> Revision:
        return await self._patch(f"{self.path}/{guid}", r, Revision)

    async def get_environment_variables(self, guid: str) -> dict[str, Any]:
        """Environment variables captured when the revision was created."""
        data = await self._client.get(f"{self.path}/{guid}/environment_variables")
        return data.get("var") or {}

    async def list_for_app_all(
        self, app_guid: str, opts: RevisionListOptions | None = None
    ) -> list[Revision]:
        return await self._list_all(
            f"/v3/apps/{app_guid}/revisions", opts or RevisionListOptions(), Revision
        )

    async def list_deployed_for_app_all(
        self, app_guid: str, opts: RevisionListOptions | None = None
    ) -> list[Revision]:
        """Revisions that currently have running processes."""
        return await self._list_all(
            f"/v3/apps/{app_guid}/revisions/deployed", opts or RevisionListOptions(), Revision
        )
