"""One-off tasks run alongside an app."""

from __future__ import annotations

import builtins

from pydantic import Field

from ..models import Task, TaskCreate, TaskState
from ..pager import Pager
from ..query import ListOptions
from .base import ResourceClient


class TaskListOptions(ListOptions):
    guids: list[str] = Field(default_factory=list)
    names: list[str] = Field(default_factory=list)
    states: list[TaskState] = Field(default_factory=list)
    app_guids: list[str] = Field(default_factory=list)
    space_guids: list[str] = Field(default_factory=list)
    organization_guids: list[str] = Field(default_factory=list)


class TaskClient(ResourceClient[Task, TaskListOptions]):
    path = "/v3/tasks"
    model = Task
    options = TaskListOptions
    resource_name = "task"

    async def create(self, app_guid: str, r: TaskCreate) -> Task:
        """Run a task using the app's current droplet unless one is given."""
        return await self._post(f"/v3/apps/{app_guid}/tasks", r, Task)

    async def cancel(self, guid: str) -> Task:
        """Request cancellation; the task moves to CANCELING."""
        return await self._post(f"{self.path}/{guid}/actions/cancel", None, Task)

    async def list_for_app(
        self, app_guid: str, opts: TaskListOptions | None = None
    ) -> tuple[builtins.list[Task], Pager]:
        return await self._list_page(f"/v3/apps/{app_guid}/tasks", opts or TaskListOptions(), Task)

    async def list_for_app_all(
        self, app_guid: str, opts: TaskListOptions | None = None
    ) -> builtins.list[Task]:
        return await self._list_all(f"/v3/apps/{app_guid}/tasks", opts or TaskListOptions(), Task)
