"""Tests for tasks, deployments, revisions, isolation segments, quotas and service resources."""

from __future__ import annotations

import json

import pytest
from httpx import Response

from cfclient import (
    Deployment,
    DeploymentCreate,
    IsolationSegmentCreate,
    IsolationSegmentListOptions,
    Metadata,
    OperationFailedError,
    OrganizationQuotaCreate,
    RevisionUpdate,
    ServicePlanListOptions,
    ServicePlanUpdate,
    ServiceUsageEventListOptions,
    TaskCreate,
    TaskListOptions,
    TaskState,
)
from cfclient.models import AppsQuota, Relationship
from cfclient.resources.deployments import deployment_state

from .conftest import API_URL, make_deployment_dict, make_task_dict, one_page


class TestTasks:
    """Tests for task operations."""

    @pytest.mark.asyncio
    async def test_create_for_app(self, cf, respx_mock):
        route = respx_mock.post("/v3/apps/app-guid-1/tasks").mock(
            return_value=Response(202, json=make_task_dict(state="PENDING"))
        )

        task = await cf.tasks.create("app-guid-1", TaskCreate(command="rake db:migrate", name="migrate"))

        assert task.state == TaskState.PENDING
        assert json.loads(route.calls.last.request.content) == {
            "command": "rake db:migrate",
            "name": "migrate",
        }

    @pytest.mark.asyncio
    async def test_cancel(self, cf, respx_mock):
        respx_mock.post("/v3/tasks/task-guid-1/actions/cancel").mock(
            return_value=Response(202, json=make_task_dict(state="CANCELING"))
        )

        task = await cf.tasks.cancel("task-guid-1")

        assert task.state == TaskState.CANCELING

    @pytest.mark.asyncio
    async def test_list_for_app(self, cf, respx_mock):
        route = respx_mock.get("/v3/apps/app-guid-1/tasks").mock(
            return_value=Response(200, json=one_page("/v3/apps/app-guid-1/tasks", [make_task_dict()]))
        )

        tasks, pager = await cf.tasks.list_for_app(
            "app-guid-1", TaskListOptions(states=[TaskState.RUNNING])
        )

        assert len(tasks) == 1
        assert pager.total_results == 1
        assert route.calls.last.request.url.params["states"] == "RUNNING"

    @pytest.mark.asyncio
    async def test_get(self, cf, respx_mock):
        respx_mock.get("/v3/tasks/task-guid-1").mock(return_value=Response(200, json=make_task_dict()))

        task = await cf.tasks.get("task-guid-1")

        assert task.sequence_id == 1


class TestDeploymentState:
    """Tests for collapsing deployment status into a pollable state."""

    @pytest.mark.parametrize(
        "value,reason,expected",
        [
            ("ACTIVE", "DEPLOYING", "ACTIVE"),
            ("ACTIVE", "CANCELING", "ACTIVE"),
            ("FINALIZED", "DEPLOYED", "DEPLOYED"),
            ("FINALIZED", "CANCELED", "CANCELED"),
            ("FINALIZED", "SUPERSEDED", "SUPERSEDED"),
        ],
    )
    def test_state(self, value, reason, expected):
        deployment = Deployment.model_validate(make_deployment_dict(value=value, reason=reason))

        assert deployment_state(deployment) == expected


class TestDeployments:
    """Tests for deployment operations."""

    @pytest.mark.asyncio
    async def test_create(self, cf, respx_mock):
        route = respx_mock.post("/v3/deployments").mock(
            return_value=Response(201, json=make_deployment_dict())
        )

        request = DeploymentCreate.for_app("app-guid-1")
        request.droplet = Relationship(guid="droplet-guid-1")
        await cf.deployments.create(request)

        assert json.loads(route.calls.last.request.content) == {
            "relationships": {"app": {"data": {"guid": "app-guid-1"}}},
            "droplet": {"guid": "droplet-guid-1"},
        }

    @pytest.mark.asyncio
    async def test_cancel(self, cf, respx_mock):
        route = respx_mock.post("/v3/deployments/deployment-guid-1/actions/cancel").mock(
            return_value=Response(200)
        )

        await cf.deployments.cancel("deployment-guid-1")

        assert route.called

    @pytest.mark.asyncio
    async def test_poll_deployed(self, cf, respx_mock):
        route = respx_mock.get("/v3/deployments/deployment-guid-1").mock(
            side_effect=[
                Response(200, json=make_deployment_dict()),
                Response(200, json=make_deployment_dict(value="FINALIZED", reason="DEPLOYED")),
            ]
        )

        assert await cf.deployments.poll_deployed("deployment-guid-1") == "DEPLOYED"
        assert route.call_count == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reason", ["CANCELED", "SUPERSEDED"])
    async def test_poll_deployed_failure(self, cf, respx_mock, reason):
        respx_mock.get("/v3/deployments/deployment-guid-1").mock(
            return_value=Response(200, json=make_deployment_dict(value="FINALIZED", reason=reason))
        )

        with pytest.raises(OperationFailedError) as exc_info:
            await cf.deployments.poll_deployed("deployment-guid-1")

        assert exc_info.value.state == reason


class TestRevisions:
    @pytest.mark.asyncio
    async def test_get_and_update(self, cf, respx_mock):
        body = {"guid": "rev-1", "version": 3, "description": "New droplet deployed", "deployable": True}
        respx_mock.get("/v3/revisions/rev-1").mock(return_value=Response(200, json=body))
        route = respx_mock.patch("/v3/revisions/rev-1").mock(return_value=Response(200, json=body))

        rev = await cf.revisions.get("rev-1")
        await cf.revisions.update("rev-1", RevisionUpdate(metadata=Metadata(labels={"release": "v3"})))

        assert rev.version == 3
        assert json.loads(route.calls.last.request.content) == {
            "metadata": {"labels": {"release": "v3"}, "annotations": {}}
        }

    @pytest.mark.asyncio
    async def test_environment_variables(self, cf, respx_mock):
        respx_mock.get("/v3/revisions/rev-1/environment_variables").mock(
            return_value=Response(200, json={"var": {"A": "1"}})
        )

        assert await cf.revisions.get_environment_variables("rev-1") == {"A": "1"}

    @pytest.mark.asyncio
    async def test_list_deployed_for_app(self, cf, respx_mock):
        respx_mock.get("/v3/apps/app-guid-1/revisions/deployed").mock(
            return_value=Response(
                200,
                json=one_page("/v3/apps/app-guid-1/revisions/deployed", [{"guid": "rev-1", "version": 1}]),
            )
        )

        revs = await cf.revisions.list_deployed_for_app_all("app-guid-1")

        assert [r.version for r in revs] == [1]


class TestIsolationSegments:
    """Tests for isolation segment operations."""

    @pytest.mark.asyncio
    async def test_create_and_list(self, cf, respx_mock):
        respx_mock.post("/v3/isolation_segments").mock(
            return_value=Response(201, json={"guid": "iso-1", "name": "secure"})
        )
        respx_mock.get("/v3/isolation_segments").mock(
            return_value=Response(
                200, json=one_page("/v3/isolation_segments", [{"guid": "iso-1", "name": "secure"}])
            )
        )

        created = await cf.isolation_segments.create(IsolationSegmentCreate(name="secure"))
        found = await cf.isolation_segments.single(IsolationSegmentListOptions(names=["secure"]))

        assert created.guid == found.guid == "iso-1"

    @pytest.mark.asyncio
    async def test_entitle_orgs(self, cf, respx_mock):
        route = respx_mock.post("/v3/isolation_segments/iso-1/relationships/organizations").mock(
            return_value=Response(200, json={"data": [{"guid": "o1"}, {"guid": "o2"}]})
        )

        rel = await cf.isolation_segments.entitle_orgs("iso-1", ["o2"])

        assert rel.guids == ["o1", "o2"]
        assert json.loads(route.calls.last.request.content) == {"data": [{"guid": "o2"}]}

    @pytest.mark.asyncio
    async def test_revoke_org(self, cf, respx_mock):
        route = respx_mock.delete("/v3/isolation_segments/iso-1/relationships/organizations/o1").mock(
            return_value=Response(204)
        )

        await cf.isolation_segments.revoke_org("iso-1", "o1")

        assert route.called

    @pytest.mark.asyncio
    async def test_relationships(self, cf, respx_mock):
        respx_mock.get("/v3/isolation_segments/iso-1/relationships/organizations").mock(
            return_value=Response(200, json={"data": [{"guid": "o1"}]})
        )
        respx_mock.get("/v3/isolation_segments/iso-1/relationships/spaces").mock(
            return_value=Response(200, json={"data": [{"guid": "s1"}, {"guid": "s2"}]})
        )

        assert await cf.isolation_segments.list_org_relationships("iso-1") == ["o1"]
        assert await cf.isolation_segments.list_space_relationships("iso-1") == ["s1", "s2"]

    @pytest.mark.asyncio
    async def test_delete(self, cf, respx_mock):
        route = respx_mock.delete("/v3/isolation_segments/iso-1").mock(return_value=Response(204))

        assert await cf.isolation_segments.delete("iso-1") is None
        assert route.called


class TestOrganizationQuotas:
    @pytest.mark.asyncio
    async def test_create(self, cf, respx_mock):
        route = respx_mock.post("/v3/organization_quotas").mock(
            return_value=Response(
                201,
                json={"guid": "q1", "name": "small", "apps": {"total_memory_in_mb": 1024}},
            )
        )

        quota = await cf.organization_quotas.create(
            OrganizationQuotaCreate(name="small", apps=AppsQuota(total_memory_in_mb=1024))
        )

        assert quota.apps.total_memory_in_mb == 1024
        assert json.loads(route.calls.last.request.content) == {
            "name": "small",
            "apps": {"total_memory_in_mb": 1024},
        }

    @pytest.mark.asyncio
    async def test_apply(self, cf, respx_mock):
        route = respx_mock.post("/v3/organization_quotas/q1/relationships/organizations").mock(
            return_value=Response(200, json={"data": [{"guid": "o1"}]})
        )

        assert await cf.organization_quotas.apply("q1", ["o1"]) == ["o1"]
        assert json.loads(route.calls.last.request.content) == {"data": [{"guid": "o1"}]}

    @pytest.mark.asyncio
    async def test_delete(self, cf, respx_mock):
        respx_mock.delete("/v3/organization_quotas/q1").mock(
            return_value=Response(202, headers={"Location": f"{API_URL}/v3/jobs/job-q"})
        )

        assert await cf.organization_quotas.delete("q1") == "job-q"


class TestServicePlans:
    @pytest.mark.asyncio
    async def test_list_available(self, cf, respx_mock):
        route = respx_mock.get("/v3/service_plans").mock(
            return_value=Response(
                200, json=one_page("/v3/service_plans", [{"guid": "p1", "name": "small", "free": True}])
            )
        )

        plans = await cf.service_plans.list_all(
            ServicePlanListOptions(available=False, service_offering_names=["mysql"])
        )

        assert plans[0].free is True
        params = route.calls.last.request.url.params
        assert params["available"] == "false"
        assert params["service_offering_names"] == "mysql"

    @pytest.mark.asyncio
    async def test_update_metadata(self, cf, respx_mock):
        respx_mock.patch("/v3/service_plans/p1").mock(
            return_value=Response(200, json={"guid": "p1", "name": "small", "metadata": {"labels": {"tier": "dev"}}})
        )

        plan = await cf.service_plans.update("p1", ServicePlanUpdate(metadata=Metadata(labels={"tier": "dev"})))

        assert plan.metadata.labels == {"tier": "dev"}


def _usage_event(guid: str, state: str = "CREATED") -> dict:
    return {
        "guid": guid,
        "state": state,
        "space": {"guid": "space-guid-1", "name": "dev"},
        "organization": {"guid": "org-guid-1"},
        "service_instance": {"guid": "si-1", "name": "db", "type": "managed_service_instance"},
        "service_plan": {"guid": "p1", "name": "small"},
        "service_offering": {"guid": "so-1", "name": "mysql"},
        "service_broker": {"guid": "sb-1", "name": "mysql-broker"},
    }


class TestServiceUsageEvents:
    @pytest.mark.asyncio
    async def test_list_after_guid(self, cf, respx_mock):
        route = respx_mock.get("/v3/service_usage_events").mock(
            return_value=Response(
                200, json=one_page("/v3/service_usage_events", [_usage_event("e2"), _usage_event("e3", "DELETED")])
            )
        )

        events = await cf.service_usage_events.list_all(
            ServiceUsageEventListOptions(after_guid="e1", service_instance_types=["managed_service_instance"])
        )

        assert [e.state for e in events] == ["CREATED", "DELETED"]
        assert events[0].service_instance.type == "managed_service_instance"
        assert events[0].organization.guid == "org-guid-1"
        assert events[0].service_offering.name == "mysql"
        params = route.calls.last.request.url.params
        assert params["after_guid"] == "e1"
        assert params["service_instance_types"] == "managed_service_instance"

    @pytest.mark.asyncio
    async def test_get_sparse_event(self, cf, respx_mock):
        respx_mock.get("/v3/service_usage_events/e1").mock(
            return_value=Response(200, json={"guid": "e1", "state": "UPDATED"})
        )

        event = await cf.service_usage_events.get("e1")

        assert event.state == "UPDATED"
        assert event.service_broker.guid is None

    @pytest.mark.asyncio
    async def test_purge_and_reseed(self, cf, respx_mock):
        route = respx_mock.post("/v3/service_usage_events/actions/destructively_purge_all_and_reseed").mock(
            return_value=Response(200, json={})
        )

        assert await cf.service_usage_events.purge_and_reseed() is None
        assert route.called
