"""Shared fixtures and configuration for tests."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

import pytest
import pytest_asyncio
import respx

from cfclient import CloudFoundry, PollingOptions

API_URL = "https://api.example.com"

# ==================== MOCK DATA ====================


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _resource(guid: str, **fields: Any) -> dict[str, Any]:
    now = _now()
    return {
        "guid": guid,
        "created_at": now,
        "updated_at": now,
        "links": {"self": {"href": f"{API_URL}/v3/things/{guid}"}},
        **fields,
    }


def make_org_dict(guid: str = "org-guid-1", name: str = "my-org") -> dict[str, Any]:
    """Create a mock organization dictionary."""
    return _resource(
        guid,
        name=name,
        suspended=False,
        relationships={"quota": {"data": {"guid": "quota-guid"}}},
        metadata={"labels": {}, "annotations": {}},
    )


def make_space_dict(
    guid: str = "space-guid-1", name: str = "dev", org_guid: str = "org-guid-1"
) -> dict[str, Any]:
    """Create a mock space dictionary."""
    return _resource(
        guid,
        name=name,
        relationships={"organization": {"data": {"guid": org_guid}}},
        metadata={"labels": {}, "annotations": {}},
    )


def make_app_dict(
    guid: str = "app-guid-1",
    name: str = "web",
    state: str = "STOPPED",
    space_guid: str = "space-guid-1",
) -> dict[str, Any]:
    """Create a mock app dictionary."""
    return _resource(
        guid,
        name=name,
        state=state,
        lifecycle={"type": "buildpack", "data": {"buildpacks": ["python_buildpack"], "stack": "cflinuxfs4"}},
        relationships={"space": {"data": {"guid": space_guid}}},
        metadata={"labels": {}, "annotations": {}},
    )


def make_package_dict(
    guid: str = "pkg-guid-1", state: str = "AWAITING_UPLOAD", app_guid: str = "app-guid-1"
) -> dict[str, Any]:
    """Create a mock package dictionary."""
    return _resource(
        guid,
        type="bits",
        data={"checksum": {"type": "sha256", "value": None}, "error": None},
        state=state,
        relationships={"app": {"data": {"guid": app_guid}}},
    )


def make_build_dict(
    guid: str = "build-guid-1",
    state: str = "STAGING",
    error: str | None = None,
    package_guid: str = "pkg-guid-1",
    droplet_guid: str | None = None,
) -> dict[str, Any]:
    """Create a mock build dictionary."""
    return _resource(
        guid,
        state=state,
        error=error,
        lifecycle={"type": "buildpack", "data": {"buildpacks": [], "stack": None}},
        package={"guid": package_guid},
        droplet={"guid": droplet_guid} if droplet_guid else None,
        staging_memory_in_mb=1024,
        staging_disk_in_mb=1024,
    )


def make_droplet_dict(guid: str = "droplet-guid-1", state: str = "STAGED") -> dict[str, Any]:
    """Create a mock droplet dictionary."""
    return _resource(
        guid,
        state=state,
        error=None,
        lifecycle={"type": "buildpack", "data": {}},
        execution_metadata="",
        process_types={"web": "python app.py"},
        checksum={"type": "sha256", "value": "abc123"},
        buildpacks=[{"name": "python_buildpack", "detect_output": "python"}],
        stack="cflinuxfs4",
        image=None,
    )


def make_job_dict(
    guid: str = "job-guid-1",
    state: str = "PROCESSING",
    errors: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Create a mock job dictionary."""
    return _resource(
        guid,
        operation="space.apply_manifest",
        state=state,
        errors=errors or [],
        warnings=[],
    )


def make_task_dict(guid: str = "task-guid-1", state: str = "RUNNING") -> dict[str, Any]:
    """Create a mock task dictionary."""
    return _resource(
        guid,
        name="migrate",
        command="rake db:migrate",
        state=state,
        sequence_id=1,
        memory_in_mb=256,
        disk_in_mb=512,
        droplet_guid="droplet-guid-1",
        result={"failure_reason": None},
    )


def make_deployment_dict(
    guid: str = "deployment-guid-1",
    value: str = "ACTIVE",
    reason: str = "DEPLOYING",
) -> dict[str, Any]:
    """Create a mock deployment dictionary."""
    return _resource(
        guid,
        state="DEPLOYING",
        status={"value": value, "reason": reason, "details": {}},
        strategy="rolling",
        droplet={"guid": "droplet-guid-1"},
        previous_droplet={"guid": "droplet-guid-0"},
        new_processes=[{"guid": "proc-guid-1", "type": "web"}],
        revision={"guid": "rev-guid-1", "version": 2},
        relationships={"app": {"data": {"guid": "app-guid-1"}}},
    )


def make_error_body(detail: str, title: str = "CF-UnprocessableEntity", code: int = 10008) -> dict[str, Any]:
    """Create a Cloud Controller v3 error envelope."""
    return {"errors": [{"code": code, "title": title, "detail": detail}]}


def paged(
    path: str,
    pages: list[list[dict[str, Any]]],
    per_page: int = 2,
) -> list[dict[str, Any]]:
    """Build the list envelopes of a paginated collection.

    Page ``i`` links to page ``i + 1`` through ``pagination.next`` except the
    last one, whose next link is null.
    """
    total_results = sum(len(p) for p in pages)
    total_pages = len(pages)

    def link(n: int) -> dict[str, str]:
        return {"href": f"{API_URL}{path}?page={n}&per_page={per_page}"}

    envelopes = []
    for i, resources in enumerate(pages, start=1):
        envelopes.append(
            {
                "pagination": {
                    "total_results": total_results,
                    "total_pages": total_pages,
                    "first": link(1),
                    "last": link(max(total_pages, 1)),
                    "next": link(i + 1) if i < total_pages else None,
                    "previous": link(i - 1) if i > 1 else None,
                },
                "resources": resources,
            }
        )
    return envelopes


def one_page(path: str, resources: list[dict[str, Any]]) -> dict[str, Any]:
    """A single, final list page."""
    return paged(path, [resources])[0]


# ==================== FIXTURES ====================


@pytest.fixture
def api_url() -> str:
    """Base URL for API mocks."""
    return API_URL


@pytest.fixture
def respx_mock():
    """Fixture for respx mocking."""
    with respx.mock(base_url=API_URL, assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def fast_polling() -> PollingOptions:
    """Polling options that keep timing tests short."""
    return PollingOptions(timeout=1.0, check_interval=0.01)


@pytest_asyncio.fixture
async def cf(fast_polling):
    """An async client pointed at the mock API."""
    async with CloudFoundry(api_url=API_URL, token="test-token", polling=fast_polling) as client:
        yield client


@pytest.fixture
def cf_config_file(tmp_path):
    """Create a temporary cf CLI config file."""
    config = tmp_path / "config.json"
    config.write_text(
        json.dumps(
            {
                "AccessToken": "bearer file-token",
                "Target": "https://api.from-config.example.com",
            }
        )
    )
    return config
