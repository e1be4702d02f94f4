"""Per-resource clients hung off ``CloudFoundry``."""

from .apps import AppClient, AppListOptions
from .base import BaseClient, ResourceClient
from .builds import BuildClient, BuildListOptions
from .deployments import DeploymentClient, DeploymentListOptions
from .droplets import DropletClient, DropletListOptions, DropletPackageListOptions
from .isolation_segments import IsolationSegmentClient, IsolationSegmentListOptions
from .jobs import JobClient
from .manifests import ManifestClient
from .organization_quotas import OrganizationQuotaClient, OrganizationQuotaListOptions
from .organizations import OrganizationClient, OrganizationListOptions
from .packages import PackageClient, PackageListOptions
from .revisions import RevisionClient, RevisionListOptions
from .service_plans import ServicePlanClient, ServicePlanListOptions
from .service_usage_events import ServiceUsageEventClient, ServiceUsageEventListOptions
from .spaces import SpaceClient, SpaceListOptions, UserListOptions
from .tasks import TaskClient, TaskListOptions

__all__ = [
    "AppClient",
    "AppListOptions",
    "BaseClient",
    "BuildClient",
    "BuildListOptions",
    "DeploymentClient",
    "DeploymentListOptions",
    "DropletClient",
    "DropletListOptions",
    "DropletPackageListOptions",
    "IsolationSegmentClient",
    "IsolationSegmentListOptions",
    "JobClient",
    "ManifestClient",
    "OrganizationClient",
    "OrganizationListOptions",
    "OrganizationQuotaClient",
    "OrganizationQuotaListOptions",
    "PackageClient",
    "PackageListOptions",
    "ResourceClient",
    "RevisionClient",
    "RevisionListOptions",
    "ServicePlanClient",
    "ServicePlanListOptions",
    "ServiceUsageEventClient",
    "ServiceUsageEventListOptions",
    "SpaceClient",
    "SpaceListOptions",
    "TaskClient",
    "TaskListOptions",
    "UserListOptions",
]
