"""Apps."""

from __future__ import annotations

import builtins
from typing import Any

from pydantic import Field

from ..models import (
    App,
    AppCreate,
    AppEnvironment,
    AppPermissions,
    AppSSHEnabled,
    AppUpdate,
    LifecycleType,
    Organization,
    Space,
)
from ..pager import Pager
from ..query import ListOptions
from .base import ResourceClient, first_included, validate


class AppListOptions(ListOptions):
    guids: list[str] = Field(default_factory=list)
    names: list[str] = Field(default_factory=list)
    organization_guids: list[str] = Field(default_factory=list)
    space_guids: list[str] = Field(default_factory=list)
    stacks: list[str] = Field(default_factory=list)
    lifecycle_type: LifecycleType | None = None
    include: list[str] = Field(default_factory=list)


class AppClient(ResourceClient[App, AppListOptions]):
    """Create, inspect and control the lifecycle of apps."""

    path = "/v3/apps"
    model = App
    options = AppListOptions
    resource_name = "app"

    async def create(self, r: AppCreate) -> App:
        return await self._post(self.path, r, App)

    async def update(self, guid: str, r: AppUpdate) -> App:
        return await self._patch(f"{self.path}/{guid}", r, App)

    async def delete(self, guid: str) -> str:
        """Delete the app; returns the GUID of the deletion job."""
        return await self._delete(guid)

    async def start(self, guid: str) -> App:
        return await self._post(f"{self.path}/{guid}/actions/start", None, App)

    async def stop(self, guid: str) -> App:
        return await self._post(f"{self.path}/{guid}/actions/stop", None, App)

    async def restart(self, guid: str) -> App:
        """Stop then start the app in one call; instances are briefly down."""
        return await self._post(f"{self.path}/{guid}/actions/restart", None, App)

    async def get_environment_variables(self, guid: str) -> dict[str, Any]:
        """User-provided environment variables of the app."""
        data = await self._client.get(f"{self.path}/{guid}/environment_variables")
        return data.get("var") or {}

    async def set_environment_variables(
        self, guid: str, env: dict[str, str | None]
    ) -> dict[str, Any]:
        """Merge ``env`` into the app's variables; a ``None`` value removes one.

        Returns:
            The full set of variables after the update.
        """
        data = await self._client.patch(
            f"{self.path}/{guid}/environment_variables", {"var": env}
        )
        return data.get("var") or {}

    async def ssh_enabled(self, guid: str) -> AppSSHEnabled:
        return await self._get(f"{self.path}/{guid}/ssh_enabled", AppSSHEnabled)

    async def permissions(self, guid: str) -> AppPermissions:
        return await self._get(f"{self.path}/{guid}/permissions", AppPermissions)

    async def get_environment(self, guid: str) -> AppEnvironment:
        """The app's full runtime environment, including service bindings."""
        return await self._get(f"{self.path}/{guid}/env", AppEnvironment)

    async def get_include_space(self, guid: str) -> tuple[App, Space]:
        """Fetch an app together with its space."""
        data = await self._client.get(f"{self.path}/{guid}?include=space")
        return validate(App, data), first_included(data, "spaces", Space, f"App {guid}")

    async def get_include_space_and_org(self, guid: str) -> tuple[App, Space, Organization]:
        """Fetch an app together with its space and that space's organization."""
        data = await self._client.get(f"{self.path}/{guid}?include=space.organization")
        owner = f"App {guid}"
        return (
            validate(App, data),
            first_included(data, "spaces", Space, owner),
            first_included(data, "organizations", Organization, owner),
        )

    async def list_include_spaces(
        self, opts: AppListOptions | None = None
    ) -> tuple[builtins.list[App], builtins.list[Space], Pager]:
        """One page of apps plus the spaces they live in."""
        opts = _including(opts, "space")
        apps, included, pager = await self._list_page_included(
            self.path, opts, App, {"spaces": Space}
        )
        return apps, included["spaces"], pager

    async def list_include_spaces_all(
        self, opts: AppListOptions | None = None
    ) -> tuple[builtins.list[App], builtins.list[Space]]:
        opts = _including(opts, "space")
        apps, included = await self._list_all_included(self.path, opts, App, {"spaces": Space})
        return apps, included["spaces"]

    async def list_include_spaces_and_orgs(
        self, opts: AppListOptions | None = None
    ) -> tuple[builtins.list[App], builtins.list[Space], builtins.list[Organization], Pager]:
        """One page of apps plus their spaces and organizations."""
        opts = _including(opts, "space.organization")
        apps, included, pager = await self._list_page_included(
            self.path, opts, App, {"spaces": Space, "organizations": Organization}
        )
        return apps, included["spaces"], included["organizations"], pager

    async def list_include_spaces_and_orgs_all(
        self, opts: AppListOptions | None = None
    ) -> tuple[builtins.list[App], builtins.list[Space], builtins.list[Organization]]:
        opts = _including(opts, "space.organization")
        apps, included = await self._list_all_included(
            self.path, opts, App, {"spaces": Space, "organizations": Organization}
        )
        return apps, included["spaces"], included["organizations"]


def _including(opts: AppListOptions | None, include: str) -> AppListOptions:
    return (opts or AppListOptions()).model_copy(update={"include": [include]})
