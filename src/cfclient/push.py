"""Push an app: the multi-step flow behind ``cf push``.

The push runs as an ordered list of named steps that share one context.
Each step either fills in part of the context or fails; a failure stops
the push and is re-raised as ``PushError`` naming the step and the org,
space or app it was working on.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, BinaryIO

from .exceptions import AmbiguousResultError, NotFoundError, PushError
from .manifest import AppManifest, Manifest
from .models import (
    App,
    BuildCreate,
    BuildpackLifecycle,
    Droplet,
    DropletState,
    Lifecycle,
    LifecycleType,
    Organization,
    Package,
    PackageCreate,
    Space,
)
from .packaging import read_bits
from .polling import PollingOptions
from .resources import (
    AppListOptions,
    DropletPackageListOptions,
    OrganizationListOptions,
    SpaceListOptions,
)

if TYPE_CHECKING:
    from .client import CloudFoundry

logger = logging.getLogger(__name__)

Bits = bytes | BinaryIO | str | os.PathLike[str]


@dataclass
class PushContext:
    """State accumulated while a push runs."""

    manifest: AppManifest
    bits: Bits
    org: Organization | None = None
    space: Space | None = None
    app: App | None = None
    package: Package | None = None
    build_guid: str = ""
    droplet: Droplet | None = None


Step = Callable[[PushContext], Awaitable[None]]


class AppPushOperation:
    """Create or update an app from a manifest and its source, then start it.

    Example:
        ```python
        op = AppPushOperation(cf, "my-org", "dev")
        app = await op.push(AppManifest(name="web", buildpacks=["python_buildpack"]), "./web")
        ```
    """

    def __init__(
        self,
        client: CloudFoundry,
        org_name: str,
        space_name: str,
        polling: PollingOptions | None = None,
        cancel: asyncio.Event | None = None,
    ) -> None:
        self._client = client
        self.org_name = org_name
        self.space_name = space_name
        self.polling = polling
        self.cancel = cancel

    def steps(self) -> list[tuple[str, Step]]:
        """The pipeline, in execution order."""
        return [
            ("find org", self._find_org),
            ("find space", self._find_space),
            ("apply manifest", self._apply_manifest),
            ("find app", self._find_app),
            ("create package", self._create_package),
            ("upload bits", self._upload_bits),
            ("wait for package", self._wait_for_package),
            ("create build", self._create_build),
            ("wait for build", self._wait_for_build),
            ("find droplet", self._find_droplet),
            ("assign droplet", self._assign_droplet),
            ("start app", self._start_app),
        ]

    async def push(self, manifest: AppManifest, bits: Bits) -> App:
        """Run every step and return the started app.

        Args:
            manifest: The app's manifest; applied to the space before upload.
            bits: Zip bytes, a binary file object, a ``.zip`` path or a
                directory to zip.

        Raises:
            PushError: A step failed; ``__cause__`` holds the original error.
        """
        ctx = PushContext(manifest=manifest, bits=bits)
        for name, step in self.steps():
            subject = self._subject(ctx)
            logger.info(f"push: {name} ({subject})")
            try:
                await step(ctx)
            except Exception as e:
                logger.error(f"push failed at '{name}' for {subject}: {e}")
                raise PushError(name, subject, e) from e
        assert ctx.app is not None
        return ctx.app

    def _subject(self, ctx: PushContext) -> str:
        if ctx.space is None:
            if ctx.org is None:
                return f"org '{self.org_name}'"
            return f"space '{self.org_name}/{self.space_name}'"
        return f"app '{ctx.manifest.name}' in {self.org_name}/{self.space_name}"

    async def _find_org(self, ctx: PushContext) -> None:
        ctx.org = await self._client.organizations.single(
            OrganizationListOptions(names=[self.org_name])
        )

    async def _find_space(self, ctx: PushContext) -> None:
        assert ctx.org is not None
        ctx.space = await self._client.spaces.single(
            SpaceListOptions(names=[self.space_name], organization_guids=[ctx.org.guid])
        )

    async def _apply_manifest(self, ctx: PushContext) -> None:
        assert ctx.space is not None
        # The apply endpoint only accepts the multi-app form
        job_guid = await self._client.manifests.apply(
            ctx.space.guid, Manifest.for_app(ctx.manifest)
        )
        await self._client.jobs.poll_complete(job_guid, self.polling, self.cancel)

    async def _find_app(self, ctx: PushContext) -> None:
        assert ctx.space is not None
        ctx.app = await self._client.apps.single(
            AppListOptions(names=[ctx.manifest.name], space_guids=[ctx.space.guid])
        )

    async def _create_package(self, ctx: PushContext) -> None:
        assert ctx.app is not None
        ctx.package = await self._client.packages.create(PackageCreate.for_app(ctx.app.guid))

    async def _upload_bits(self, ctx: PushContext) -> None:
        assert ctx.package is not None
        bits = await asyncio.to_thread(read_bits, ctx.bits)
        await self._client.packages.upload_bits(ctx.package.guid, bits)

    async def _wait_for_package(self, ctx: PushContext) -> None:
        assert ctx.package is not None
        await self._client.packages.poll_ready(ctx.package.guid, self.polling, self.cancel)

    async def _create_build(self, ctx: PushContext) -> None:
        assert ctx.package is not None
        build = BuildCreate.for_package(ctx.package.guid)
        build.lifecycle = Lifecycle(
            type=LifecycleType.BUILDPACK,
            data=BuildpackLifecycle(
                buildpacks=ctx.manifest.buildpacks or [],
                stack=ctx.manifest.stack,
            ),
        )
        ctx.build_guid = (await self._client.builds.create(build)).guid

    async def _wait_for_build(self, ctx: PushContext) -> None:
        await self._client.builds.poll_staged(ctx.build_guid, self.polling, self.cancel)

    async def _find_droplet(self, ctx: PushContext) -> None:
        assert ctx.package is not None
        droplets = await self._client.droplets.list_for_package_all(
            ctx.package.guid, DropletPackageListOptions(states=[DropletState.STAGED])
        )
        if not droplets:
            raise NotFoundError("Staged droplet", f"package {ctx.package.guid}")
        if len(droplets) > 1:
            raise AmbiguousResultError("staged droplet", len(droplets))
        ctx.droplet = droplets[0]

    async def _assign_droplet(self, ctx: PushContext) -> None:
        assert ctx.app is not None and ctx.droplet is not None
        await self._client.droplets.set_current_for_app(ctx.app.guid, ctx.droplet.guid)

    async def _start_app(self, ctx: PushContext) -> None:
        assert ctx.app is not None
        ctx.app = await self._client.apps.start(ctx.app.guid)
