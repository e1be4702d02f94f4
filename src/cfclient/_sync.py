"""Synchronous wrapper for the Cloud Foundry client."""

from __future__ import annotations

import asyncio
import functools
import inspect
import threading
from collections.abc import Coroutine
from pathlib import Path
from typing import Any, TypeVar

from .client import CloudFoundry
from .config import DEFAULT_TIMEOUT
from .manifest import AppManifest
from .models import App
from .polling import PollingOptions
from .push import AppPushOperation, Bits

T = TypeVar("T")

# How often a thread-side cancel flag is checked from the loop
_CANCEL_CHECK_INTERVAL = 0.05


class _LoopThread:
    """An event loop running forever on a daemon thread.

    The async client keeps one ``httpx.AsyncClient`` bound to the loop it was
    first used on, so every call must go through the same loop.
    """

    def __init__(self) -> None:
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(
            target=self._loop.run_forever, name="cfclient-sync", daemon=True
        )
        self._thread.start()

    def run(self, coro: Coroutine[Any, Any, T]) -> T:
        if self.closed:
            coro.close()
            raise RuntimeError("Client is closed")
        return asyncio.run_coroutine_threadsafe(coro, self._loop).result()

    @property
    def closed(self) -> bool:
        return self._loop.is_closed()

    def stop(self) -> None:
        if self.closed:
            return
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join()
        self._loop.close()


async def _mirror_cancel(flag: threading.Event, event: asyncio.Event) -> None:
    """Set ``event`` on the loop once another thread sets ``flag``."""
    while not flag.is_set():
        await asyncio.sleep(_CANCEL_CHECK_INTERVAL)
    event.set()


async def _push_cancellable(
    op: AppPushOperation, manifest: AppManifest, bits: Bits, cancel: threading.Event | None
) -> App:
    if cancel is None:
        return await op.push(manifest, bits)
    op.cancel = asyncio.Event()
    if cancel.is_set():
        op.cancel.set()
    mirror = asyncio.create_task(_mirror_cancel(cancel, op.cancel))
    try:
        return await op.push(manifest, bits)
    finally:
        mirror.cancel()


class _SyncResource:
    """Blocking view of one resource client: coroutine methods become calls."""

    def __init__(self, resource: Any, runner: _LoopThread) -> None:
        self._resource = resource
        self._runner = runner

    def __getattr__(self, name: str) -> Any:
        attr = getattr(self._resource, name)
        if not inspect.iscoroutinefunction(attr):
            return attr

        @functools.wraps(attr)
        def call(*args: Any, **kwargs: Any) -> Any:
            return self._runner.run(attr(*args, **kwargs))

        return call

    def __repr__(self) -> str:
        return f"<sync {type(self._resource).__name__}>"


class CloudFoundrySync:
    """Synchronous client for the Cloud Foundry v3 API.

    Blocking wrapper around ``CloudFoundry``; every resource attribute exposes
    the same methods without ``await``.

    Example:
        ```python
        from cfclient import CloudFoundrySync, SpaceListOptions

        with CloudFoundrySync("https://api.sys.example.com", token="...") as cf:
            spaces = cf.spaces.list_all(SpaceListOptions(names=["dev"]))
            for app in cf.apps.list_all():
                print(app.name, app.state)
        ```
    """

    _RESOURCES = (
        "organizations",
        "spaces",
        "apps",
        "packages",
        "builds",
        "droplets",
        "jobs",
        "manifests",
        "tasks",
        "deployments",
        "revisions",
        "isolation_segments",
        "organization_quotas",
        "service_plans",
        "service_usage_events",
    )

    def __init__(
        self,
        api_url: str | None = None,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        config_path: Path | None = None,
        polling: PollingOptions | None = None,
        max_pages: int | None = None,
        transport: Any = None,
    ) -> None:
        """Initialize the synchronous client.

        Args:
            api_url: Cloud Controller URL. Falls back to CF_API, then the cf
                CLI config.
            token: OAuth access token. Falls back to CF_ACCESS_TOKEN, then the
                cf CLI config.
            timeout: Per-request timeout in seconds.
            config_path: Path to the cf CLI ``config.json``.
            polling: Default timeout/interval for waiting on async operations.
            max_pages: Optional safety cap for ``list_all`` calls.
            transport: Custom ``httpx.AsyncBaseTransport``.
        """
        self._async_client = CloudFoundry(
            api_url=api_url,
            token=token,
            timeout=timeout,
            config_path=config_path,
            polling=polling,
            max_pages=max_pages,
            transport=transport,
        )
        self._runner = _LoopThread()
        for name in self._RESOURCES:
            setattr(self, name, _SyncResource(getattr(self._async_client, name), self._runner))

    @property
    def api_url(self) -> str:
        return self._async_client.api_url

    def __enter__(self) -> CloudFoundrySync:
        """Enter context manager."""
        self._runner.run(self._async_client.__aenter__())
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit context manager."""
        self.close()

    def close(self) -> None:
        """Close the HTTP client and stop the private event loop."""
        if self._runner.closed:
            return
        try:
            self._runner.run(self._async_client.close())
        finally:
            self._runner.stop()

    def push(
        self,
        org_name: str,
        space_name: str,
        manifest: AppManifest,
        bits: Bits,
        polling: PollingOptions | None = None,
        cancel: threading.Event | None = None,
    ) -> App:
        """Push an app and start it. See ``AppPushOperation.push``.

        Setting ``cancel`` from any thread stops the push at its next wait
        with a ``PushError`` caused by ``PollCancelledError``.
        """
        op = AppPushOperation(self._async_client, org_name, space_name, polling=polling)
        return self._runner.run(_push_cancellable(op, manifest, bits, cancel))
