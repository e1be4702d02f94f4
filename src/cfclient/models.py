"""Pydantic models for Cloud Controller v3 resources."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from .pager import Link

# ==================== STATES ====================


class LifecycleType(str, Enum):
    BUILDPACK = "buildpack"
    DOCKER = "docker"
    CNB = "cnb"


class AppState(str, Enum):
    STARTED = "STARTED"
    STOPPED = "STOPPED"


class PackageState(str, Enum):
    AWAITING_UPLOAD = "AWAITING_UPLOAD"
    PROCESSING_UPLOAD = "PROCESSING_UPLOAD"
    READY = "READY"
    FAILED = "FAILED"
    COPYING = "COPYING"
    EXPIRED = "EXPIRED"


class BuildState(str, Enum):
    STAGING = "STAGING"
    STAGED = "STAGED"
    FAILED = "FAILED"


class DropletState(str, Enum):
    AWAITING_UPLOAD = "AWAITING_UPLOAD"
    PROCESSING_UPLOAD = "PROCESSING_UPLOAD"
    STAGED = "STAGED"
    COPYING = "COPYING"
    FAILED = "FAILED"
    EXPIRED = "EXPIRED"


class JobState(str, Enum):
    PROCESSING = "PROCESSING"
    POLLING = "POLLING"
    COMPLETE = "COMPLETE"
    FAILED = "FAILED"


class TaskState(str, Enum):
    PENDING = "PENDING"
    RUNNING = "RUNNING"
    SUCCEEDED = "SUCCEEDED"
    CANCELING = "CANCELING"
    FAILED = "FAILED"


class DeploymentStatusValue(str, Enum):
    ACTIVE = "ACTIVE"
    FINALIZED = "FINALIZED"


class DeploymentStatusReason(str, Enum):
    DEPLOYING = "DEPLOYING"
    CANCELING = "CANCELING"
    DEPLOYED = "DEPLOYED"
    CANCELED = "CANCELED"
    SUPERSEDED = "SUPERSEDED"


# ==================== COMMON ====================


class Relationship(BaseModel):
    """Reference to another resource by GUID."""

    guid: str | None = None


class ToOneRelationship(BaseModel):
    data: Relationship | None = None

    @classmethod
    def to(cls, guid: str) -> ToOneRelationship:
        return cls(data=Relationship(guid=guid))

    @property
    def guid(self) -> str | None:
        return self.data.guid if self.data else None


class ToManyRelationship(BaseModel):
    data: list[Relationship] = Field(default_factory=list)

    @classmethod
    def to(cls, guids: list[str]) -> ToManyRelationship:
        return cls(data=[Relationship(guid=g) for g in guids])

    @property
    def guids(self) -> list[str]:
        return [r.guid for r in self.data if r.guid]


class Metadata(BaseModel):
    """User-defined labels and annotations."""

    labels: dict[str, str | None] = Field(default_factory=dict)
    annotations: dict[str, str | None] = Field(default_factory=dict)


class Resource(BaseModel):
    """Fields shared by every v3 resource."""

    guid: str = Field(..., description="Resource GUID")
    created_at: datetime | None = Field(None, description="Creation timestamp")
    updated_at: datetime | None = Field(None, description="Last update timestamp")
    links: dict[str, Link] = Field(default_factory=dict)


class BuildpackLifecycle(BaseModel):
    buildpacks: list[str] = Field(default_factory=list)
    stack: str | None = None


class Lifecycle(BaseModel):
    type: LifecycleType = LifecycleType.BUILDPACK
    data: BuildpackLifecycle = Field(default_factory=BuildpackLifecycle)


# ==================== ORGANIZATIONS ====================


class Organization(Resource):
    name: str
    suspended: bool = False
    relationships: dict[str, ToOneRelationship] = Field(default_factory=dict)
    metadata: Metadata = Field(default_factory=Metadata)


class OrganizationCreate(BaseModel):
    name: str = Field(..., min_length=1)
    suspended: bool | None = None
    metadata: Metadata | None = None


class OrganizationUpdate(BaseModel):
    name: str | None = None
    suspended: bool | None = None
    metadata: Metadata | None = None


class Domain(Resource):
    name: str
    internal: bool = False
    router_group: Relationship | None = None
    supported_protocols: list[str] = Field(default_factory=list)
    relationships: dict[str, Any] = Field(default_factory=dict)
    metadata: Metadata = Field(default_factory=Metadata)


class OrganizationUsageSummary(BaseModel):
    """Aggregate usage of an organization."""

    started_instances: int = 0
    memory_in_mb: int = 0
    routes: int | None = None
    service_instances: int | None = None
    spaces: int | None = None
    domains: int | None = None


# ==================== SPACES ====================


class Space(Resource):
    name: str
    relationships: dict[str, ToOneRelationship] = Field(default_factory=dict)
    metadata: Metadata = Field(default_factory=Metadata)

    @property
    def organization_guid(self) -> str | None:
        rel = self.relationships.get("organization")
        return rel.guid if rel else None


class SpaceCreate(BaseModel):
    name: str = Field(..., min_length=1)
    relationships: dict[str, ToOneRelationship]
    metadata: Metadata | None = None

    @classmethod
    def for_org(cls, name: str, org_guid: str) -> SpaceCreate:
        return cls(name=name, relationships={"organization": ToOneRelationship.to(org_guid)})


class SpaceUpdate(BaseModel):
    name: str | None = None
    metadata: Metadata | None = None


# ==================== USERS ====================


class User(Resource):
    """A UAA user known to the Cloud Controller."""

    username: str | None = None
    presentation_name: str = ""
    origin: str | None = None
    metadata: Metadata = Field(default_factory=Metadata)


# ==================== APPS ====================


class App(Resource):
    """Application resource."""

    name: str
    state: AppState = AppState.STOPPED
    lifecycle: Lifecycle | None = None
    relationships: dict[str, ToOneRelationship] = Field(default_factory=dict)
    metadata: Metadata = Field(default_factory=Metadata)

    @property
    def space_guid(self) -> str | None:
        rel = self.relationships.get("space")
        return rel.guid if rel else None


class AppCreate(BaseModel):
    name: str = Field(..., min_length=1)
    relationships: dict[str, ToOneRelationship]
    environment_variables: dict[str, str] | None = None
    lifecycle: Lifecycle | None = None
    metadata: Metadata | None = None

    @classmethod
    def for_space(cls, name: str, space_guid: str) -> AppCreate:
        return cls(name=name, relationships={"space": ToOneRelationship.to(space_guid)})


class AppUpdate(BaseModel):
    name: str | None = None
    lifecycle: Lifecycle | None = None
    metadata: Metadata | None = None


class AppSSHEnabled(BaseModel):
    enabled: bool
    reason: str = ""


class AppPermissions(BaseModel):
    read_basic_data: bool
    read_sensitive_data: bool


class AppEnvironment(BaseModel):
    """Everything an app's processes see in their environment at runtime.

    Unlike the app's own environment variables this includes the staging and
    running variable groups, ``VCAP_SERVICES`` (``system_env_json``) and
    ``VCAP_APPLICATION`` (``application_env_json``).
    """

    environment_variables: dict[str, Any] = Field(default_factory=dict)
    staging_env_json: dict[str, Any] = Field(default_factory=dict)
    running_env_json: dict[str, Any] = Field(default_factory=dict)
    system_env_json: dict[str, Any] = Field(default_factory=dict)
    application_env_json: dict[str, Any] = Field(default_factory=dict)


# ==================== PACKAGES ====================


class Package(Resource):
    type: str = "bits"
    data: dict[str, Any] = Field(default_factory=dict)
    state: PackageState
    relationships: dict[str, ToOneRelationship] = Field(default_factory=dict)
    metadata: Metadata = Field(default_factory=Metadata)


class PackageCreate(BaseModel):
    type: str = "bits"
    relationships: dict[str, ToOneRelationship]
    data: dict[str, Any] | None = None
    metadata: Metadata | None = None

    @classmethod
    def for_app(cls, app_guid: str) -> PackageCreate:
        return cls(relationships={"app": ToOneRelationship.to(app_guid)})


# ==================== BUILDS ====================


class Build(Resource):
    """A staging run that turns a package into a droplet."""

    state: BuildState
    error: str | None = None
    lifecycle: Lifecycle | None = None
    package: Relationship | None = None
    droplet: Relationship | None = None
    staging_memory_in_mb: int | None = None
    staging_disk_in_mb: int | None = None
    relationships: dict[str, ToOneRelationship] = Field(default_factory=dict)
    metadata: Metadata = Field(default_factory=Metadata)


class BuildCreate(BaseModel):
    package: Relationship
    lifecycle: Lifecycle | None = None
    staging_memory_in_mb: int | None = None
    staging_disk_in_mb: int | None = None
    metadata: Metadata | None = None

    @classmethod
    def for_package(cls, package_guid: str) -> BuildCreate:
        return cls(package=Relationship(guid=package_guid))


# ==================== DROPLETS ====================


class Droplet(Resource):
    state: DropletState
    error: str | None = None
    lifecycle: Lifecycle | None = None
    execution_metadata: str | None = None
    process_types: dict[str, str] = Field(default_factory=dict)
    checksum: dict[str, str] | None = None
    buildpacks: list[dict[str, Any]] = Field(default_factory=list)
    stack: str | None = None
    image: str | None = None
    relationships: dict[str, ToOneRelationship] = Field(default_factory=dict)
    metadata: Metadata = Field(default_factory=Metadata)


# ==================== JOBS ====================


class JobError(BaseModel):
    code: int | None = None
    title: str | None = None
    detail: str | None = None


class Job(Resource):
    """An asynchronous server-side operation."""

    operation: str = ""
    state: JobState
    errors: list[JobError] = Field(default_factory=list)
    warnings: list[dict[str, Any]] = Field(default_factory=list)

    @property
    def failure_reason(self) -> str | None:
        if not self.errors:
            return None
        first = self.errors[0]
        return first.detail or first.title


# ==================== TASKS ====================


class TaskResult(BaseModel):
    failure_reason: str | None = None


class Task(Resource):
    name: str
    command: str | None = None
    state: TaskState
    sequence_id: int | None = None
    memory_in_mb: int | None = None
    disk_in_mb: int | None = None
    droplet_guid: str | None = None
    result: TaskResult = Field(default_factory=TaskResult)
    relationships: dict[str, ToOneRelationship] = Field(default_factory=dict)
    metadata: Metadata = Field(default_factory=Metadata)


class TaskCreate(BaseModel):
    command: str | None = None
    name: str | None = None
    memory_in_mb: int | None = None
    disk_in_mb: int | None = None
    droplet_guid: str | None = None
    metadata: Metadata | None = None


# ==================== DEPLOYMENTS ====================


class DeploymentStatus(BaseModel):
    value: DeploymentStatusValue
    reason: str = ""
    details: dict[str, str] = Field(default_factory=dict)


class DeploymentRevision(BaseModel):
    guid: str
    version: int | None = None


class ProcessReference(BaseModel):
    guid: str
    type: str


class Deployment(Resource):
    """A rolling update of an app to a new droplet or revision."""

    state: str | None = None
    status: DeploymentStatus
    strategy: str = "rolling"
    droplet: Relationship | None = None
    previous_droplet: Relationship | None = None
    new_processes: list[ProcessReference] = Field(default_factory=list)
    revision: DeploymentRevision | None = None
    relationships: dict[str, ToOneRelationship] = Field(default_factory=dict)
    metadata: Metadata = Field(default_factory=Metadata)


class DeploymentCreate(BaseModel):
    relationships: dict[str, ToOneRelationship]
    droplet: Relationship | None = None
    revision: DeploymentRevision | None = None
    strategy: str | None = None
    metadata: Metadata | None = None

    @classmethod
    def for_app(cls, app_guid: str) -> DeploymentCreate:
        return cls(relationships={"app": ToOneRelationship.to(app_guid)})


# ==================== REVISIONS ====================


class RevisionProcess(BaseModel):
    command: str | None = None


class RevisionSidecar(BaseModel):
    name: str
    command: str
    process_types: list[str] = Field(default_factory=list)
    memory_in_mb: int | None = None


class Revision(Resource):
    version: int
    droplet: Relationship | None = None
    processes: dict[str, RevisionProcess] = Field(default_factory=dict)
    sidecars: list[RevisionSidecar] = Field(default_factory=list)
    description: str = ""
    deployable: bool = False
    relationships: dict[str, ToOneRelationship] = Field(default_factory=dict)
    metadata: Metadata = Field(default_factory=Metadata)


class RevisionUpdate(BaseModel):
    metadata: Metadata


# ==================== ISOLATION SEGMENTS ====================


class IsolationSegment(Resource):
    name: str
    metadata: Metadata = Field(default_factory=Metadata)


class IsolationSegmentCreate(BaseModel):
    name: str = Field(..., min_length=1)
    metadata: Metadata | None = None


class IsolationSegmentUpdate(BaseModel):
    name: str | None = None
    metadata: Metadata | None = None


# ==================== ORGANIZATION QUOTAS ====================


class AppsQuota(BaseModel):
    total_memory_in_mb: int | None = None
    per_process_memory_in_mb: int | None = None
    log_rate_limit_in_bytes_per_second: int | None = None
    total_instances: int | None = None
    per_app_tasks: int | None = None


class ServicesQuota(BaseModel):
    paid_services_allowed: bool | None = None
    total_service_instances: int | None = None
    total_service_keys: int | None = None


class RoutesQuota(BaseModel):
    total_routes: int | None = None
    total_reserved_ports: int | None = None


class DomainsQuota(BaseModel):
    total_domains: int | None = None


class OrganizationQuota(Resource):
    """Limits applied to every organization the quota is assigned to."""

    name: str
    apps: AppsQuota = Field(default_factory=AppsQuota)
    services: ServicesQuota = Field(default_factory=ServicesQuota)
    routes: RoutesQuota = Field(default_factory=RoutesQuota)
    domains: DomainsQuota = Field(default_factory=DomainsQuota)
    relationships: dict[str, ToManyRelationship] = Field(default_factory=dict)


class OrganizationQuotaCreate(BaseModel):
    name: str = Field(..., min_length=1)
    apps: AppsQuota | None = None
    services: ServicesQuota | None = None
    routes: RoutesQuota | None = None
    domains: DomainsQuota | None = None
    relationships: dict[str, ToManyRelationship] | None = None


class OrganizationQuotaUpdate(BaseModel):
    name: str | None = None
    apps: AppsQuota | None = None
    services: ServicesQuota | None = None
    routes: RoutesQuota | None = None
    domains: DomainsQuota | None = None


# ==================== SERVICE PLANS ====================


class ServicePlan(Resource):
    name: str
    description: str | None = None
    visibility_type: str | None = None
    available: bool = True
    free: bool = False
    costs: list[dict[str, Any]] = Field(default_factory=list)
    maintenance_info: dict[str, Any] = Field(default_factory=dict)
    broker_catalog: dict[str, Any] = Field(default_factory=dict)
    schemas: dict[str, Any] = Field(default_factory=dict)
    relationships: dict[str, ToOneRelationship] = Field(default_factory=dict)
    metadata: Metadata = Field(default_factory=Metadata)


class ServicePlanUpdate(BaseModel):
    metadata: Metadata


# ==================== SERVICE USAGE EVENTS ====================


class ServiceUsageReference(BaseModel):
    guid: str | None = None
    name: str | None = None


class ServiceUsageInstance(ServiceUsageReference):
    type: str | None = None


class ServiceUsageEvent(Resource):
    """A change to a service instance, recorded for billing and auditing."""

    state: str | None = None
    space: ServiceUsageReference = Field(default_factory=ServiceUsageReference)
    organization: Relationship = Field(default_factory=Relationship)
    service_instance: ServiceUsageInstance = Field(default_factory=ServiceUsageInstance)
    service_plan: ServiceUsageReference = Field(default_factory=ServiceUsageReference)
    service_offering: ServiceUsageReference = Field(default_factory=ServiceUsageReference)
    service_broker: ServiceUsageReference = Field(default_factory=ServiceUsageReference)


def dump_request(model: BaseModel) -> dict[str, Any]:
    """Serialize a request body, leaving out unset fields."""
    return model.model_dump(mode="json", exclude_none=True, by_alias=True)


