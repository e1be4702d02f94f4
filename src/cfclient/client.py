"""Async HTTP client for the Cloud Foundry v3 API."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

import httpx

from .auth import AuthProvider, get_api_url
from .config import CF_API_URL, DEFAULT_TIMEOUT, USER_AGENT
from .exceptions import (
    ConnectionError,
    TimeoutError,
    TransportError,
    raise_for_status,
)
from .manifest import AppManifest
from .models import App
from .polling import PollingOptions
from .push import AppPushOperation, Bits
from .resources import (
    AppClient,
    BuildClient,
    DeploymentClient,
    DropletClient,
    IsolationSegmentClient,
    JobClient,
    ManifestClient,
    OrganizationClient,
    OrganizationQuotaClient,
    PackageClient,
    RevisionClient,
    ServicePlanClient,
    ServiceUsageEventClient,
    SpaceClient,
    TaskClient,
)

logger = logging.getLogger(__name__)


class CloudFoundry:
    """Async client for the Cloud Foundry v3 API.

    Resource operations hang off one attribute per resource type
    (``client.apps``, ``client.spaces``, ...).

    Example:
        ```python
        import asyncio
        from cfclient import CloudFoundry, OrganizationListOptions

        async def main():
            async with CloudFoundry("https://api.sys.example.com", token="...") as cf:
                orgs = await cf.organizations.list_all()
                org = await cf.organizations.single(OrganizationListOptions(names=["dev"]))
                print(org.guid, len(orgs))

        asyncio.run(main())
        ```
    """

    def __init__(
        self,
        api_url: str | None = None,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        config_path: Path | None = None,
        polling: PollingOptions | None = None,
        max_pages: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_url: Cloud Controller URL. Falls back to the CF_API env var,
                then the ``Target`` of the cf CLI config.
            token: OAuth access token. Falls back to CF_ACCESS_TOKEN, then the
                cf CLI config.
            timeout: Per-request timeout in seconds.
            config_path: Path to the cf CLI ``config.json``.
            polling: Default timeout/interval for waiting on async operations.
            max_pages: Optional safety cap for ``list_all`` calls.
            transport: Custom httpx transport (tests, proxies).
        """
        resolved_url = get_api_url(api_url or CF_API_URL or None, config_path)
        if not resolved_url:
            raise ValueError(
                "No Cloud Controller URL. Pass api_url=..., set CF_API, or target one with the cf CLI"
            )
        self._api_url = resolved_url.rstrip("/")
        self._timeout = timeout
        self._auth = AuthProvider(token=token, config_path=config_path)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self.polling = polling or PollingOptions()
        self.max_pages = max_pages

        self.organizations = OrganizationClient(self)
        self.spaces = SpaceClient(self)
        self.apps = AppClient(self)
        self.packages = PackageClient(self)
        self.builds = BuildClient(self)
        self.droplets = DropletClient(self)
        self.jobs = JobClient(self)
        self.manifests = ManifestClient(self)
        self.tasks = TaskClient(self)
        self.deployments = DeploymentClient(self)
        self.revisions = RevisionClient(self)
        self.isolation_segments = IsolationSegmentClient(self)
        self.organization_quotas = OrganizationQuotaClient(self)
        self.service_plans = ServicePlanClient(self)
        self.service_usage_events = ServiceUsageEventClient(self)

    @property
    def api_url(self) -> str:
        return self._api_url

    async def __aenter__(self) -> CloudFoundry:
        """Enter async context manager."""
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager."""
        await self.close()

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure the HTTP client is initialized."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._api_url,
                timeout=httpx.Timeout(self._timeout),
                transport=self._transport,
                headers={
                    "User-Agent": USER_AGENT,
                    "Accept": "application/json",
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def push(
        self,
        org_name: str,
        space_name: str,
        manifest: AppManifest,
        bits: Bits,
        polling: PollingOptions | None = None,
        cancel: asyncio.Event | None = None,
    ) -> App:
        """Push an app and start it. See ``AppPushOperation.push``."""
        op = AppPushOperation(self, org_name, space_name, polling=polling, cancel=cancel)
        return await op.push(manifest, bits)

    def _get_headers(self) -> dict[str, str]:
        """Get request headers including authorization."""
        return self._auth.get_headers()

    async def _request(
        self,
        method: str,
        path: str,
        json_data: Any = None,
        content: str | bytes | None = None,
        files: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Make a request to the API.

        Args:
            method: HTTP method.
            path: Path including the ``/v3`` prefix and any query string.
            json_data: JSON body data.
            content: Raw body (e.g. a YAML manifest).
            files: Files for multipart upload.
            headers: Extra headers for this request.

        Returns:
            The response, after error statuses have been raised.

        Raises:
            APIError: On API errors.
            ConnectionError: On connection errors.
            TimeoutError: On timeout.
            TransportError: On any other transport failure.
        """
        client = await self._ensure_client()
        request_headers = {**self._get_headers(), **(headers or {})}

        try:
            response = await client.request(
                method,
                path,
                headers=request_headers,
                json=json_data,
                content=content,
                files=files,
            )
        except httpx.ConnectError as e:
            raise ConnectionError(f"Cannot connect to {self._api_url}: {e}", e) from e
        except httpx.TimeoutException as e:
            raise TimeoutError(
                f"Request timed out after {self._timeout}s", self._timeout, e
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {path} failed: {e}", e) from e

        logger.debug(f"{method} {path} -> {response.status_code}")

        if response.status_code >= 400:
            raise_for_status(response.status_code, _safe_json(response))

        return response

    async def get(self, path: str) -> dict[str, Any]:
        """GET ``path`` and decode the JSON body."""
        response = await self._request("GET", path)
        return _safe_json(response)

    async def get_text(self, path: str) -> str:
        """GET ``path`` and return the raw body (e.g. a YAML manifest)."""
        response = await self._request("GET", path)
        return response.text

    async def post(self, path: str, body: Any = None, **kwargs: Any) -> dict[str, Any]:
        """POST ``body`` as JSON and decode the response."""
        response = await self._request("POST", path, json_data=body, **kwargs)
        return _safe_json(response)

    async def post_async(self, path: str, **kwargs: Any) -> str:
        """POST for an operation the server runs as a job; returns the job GUID."""
        response = await self._request("POST", path, **kwargs)
        return job_guid_from_response(response)

    async def patch(self, path: str, body: Any = None) -> dict[str, Any]:
        """PATCH ``body`` as JSON and decode the response."""
        response = await self._request("PATCH", path, json_data=body)
        return _safe_json(response)

    async def delete(self, path: str) -> str:
        """DELETE ``path``; returns the job GUID, or "" if it finished synchronously."""
        response = await self._request("DELETE", path)
        return job_guid_from_response(response)


def _safe_json(response: httpx.Response) -> dict[str, Any]:
    """Decode a JSON body, treating empty or non-JSON bodies as ``{}``."""
    if response.status_code == 204 or not response.content:
        return {}
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {"resources": data}


def job_guid_from_response(response: httpx.Response) -> str:
    """Extract the job GUID from a ``Location: .../v3/jobs/<guid>`` header."""
    location = response.headers.get("Location", "")
    if "/jobs/" not in location:
        return ""
    return location.rstrip("/").rsplit("/", 1)[-1]
