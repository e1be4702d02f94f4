"""Python client for the Cloud Foundry v3 API.

Typed access to Cloud Controller resources, with pagination, polling of
asynchronous operations and a ``cf push`` style orchestration helper.

Basic Usage:
    ```python
    from cfclient import CloudFoundry, AppListOptions

    # Async usage
    async with CloudFoundry("https://api.sys.example.com", token="...") as cf:
        apps = await cf.apps.list_all(AppListOptions(names=["web"]))
        await cf.apps.restart(apps[0].guid)

    # Sync usage
    from cfclient import CloudFoundrySync, OrganizationListOptions

    with CloudFoundrySync() as cf:
        org = cf.organizations.single(OrganizationListOptions(names=["dev"]))
        print(org.guid)
    ```

Push:
    ```python
    from cfclient import AppManifest, CloudFoundry

    async with CloudFoundry() as cf:
        manifest = AppManifest(name="web", buildpacks=["python_buildpack"], memory="256M")
        app = await cf.push("my-org", "dev", manifest, "./web")
    ```
"""

from ._sync import CloudFoundrySync
from .auth import (
    AuthProvider,
    Credentials,
    get_access_token,
    get_api_url,
    load_credentials_from_file,
)
from .client import CloudFoundry
from .config import __version__
from .exceptions import (
    AmbiguousResultError,
    APIError,
    AuthenticationError,
    CloudFoundryError,
    ConflictError,
    ConnectionError,
    ForbiddenError,
    MalformedPaginationLinkError,
    NoNextPageError,
    NotFoundError,
    OperationFailedError,
    PaginationError,
    PollCancelledError,
    PollTimeoutError,
    PushError,
    RateLimitError,
    TimeoutError,
    TransportError,
    ValidationError,
)
from .manifest import AppManifest, AppManifestDocker, AppManifestRoute, Manifest
from .models import (
    App,
    AppCreate,
    AppEnvironment,
    AppState,
    AppUpdate,
    Build,
    BuildCreate,
    BuildState,
    Deployment,
    DeploymentCreate,
    Droplet,
    DropletState,
    IsolationSegment,
    IsolationSegmentCreate,
    IsolationSegmentUpdate,
    Job,
    JobState,
    Lifecycle,
    LifecycleType,
    Metadata,
    Organization,
    OrganizationCreate,
    OrganizationQuota,
    OrganizationQuotaCreate,
    OrganizationQuotaUpdate,
    OrganizationUpdate,
    Package,
    PackageCreate,
    PackageState,
    Revision,
    RevisionUpdate,
    ServicePlan,
    ServicePlanUpdate,
    ServiceUsageEvent,
    Space,
    SpaceCreate,
    SpaceUpdate,
    Task,
    TaskCreate,
    TaskState,
    User,
)
from .packaging import read_bits, zip_directory
from .pager import Pager, Pagination, auto_page, single
from .polling import PollingOptions, poll, poll_with_options
from .push import AppPushOperation
from .query import ListOptions
from .resources import (
    AppListOptions,
    BuildListOptions,
    DeploymentListOptions,
    DropletListOptions,
    DropletPackageListOptions,
    IsolationSegmentListOptions,
    OrganizationListOptions,
    OrganizationQuotaListOptions,
    PackageListOptions,
    RevisionListOptions,
    ServicePlanListOptions,
    ServiceUsageEventListOptions,
    SpaceListOptions,
    TaskListOptions,
    UserListOptions,
)

__all__ = [
    # Version
    "__version__",
    # Main clients
    "CloudFoundry",
    "CloudFoundrySync",
    "AppPushOperation",
    # Pagination and polling
    "ListOptions",
    "Pager",
    "Pagination",
    "auto_page",
    "single",
    "PollingOptions",
    "poll",
    "poll_with_options",
    # List options
    "AppListOptions",
    "BuildListOptions",
    "DeploymentListOptions",
    "DropletListOptions",
    "DropletPackageListOptions",
    "IsolationSegmentListOptions",
    "OrganizationListOptions",
    "OrganizationQuotaListOptions",
    "PackageListOptions",
    "RevisionListOptions",
    "ServicePlanListOptions",
    "ServiceUsageEventListOptions",
    "SpaceListOptions",
    "TaskListOptions",
    "UserListOptions",
    # Models
    "App",
    "AppCreate",
    "AppEnvironment",
    "AppState",
    "AppUpdate",
    "Build",
    "BuildCreate",
    "BuildState",
    "Deployment",
    "DeploymentCreate",
    "Droplet",
    "DropletState",
    "IsolationSegment",
    "IsolationSegmentCreate",
    "IsolationSegmentUpdate",
    "Job",
    "JobState",
    "Lifecycle",
    "LifecycleType",
    "Metadata",
    "Organization",
    "OrganizationCreate",
    "OrganizationQuota",
    "OrganizationQuotaCreate",
    "OrganizationQuotaUpdate",
    "OrganizationUpdate",
    "Package",
    "PackageCreate",
    "PackageState",
    "Revision",
    "RevisionUpdate",
    "ServicePlan",
    "ServicePlanUpdate",
    "ServiceUsageEvent",
    "Space",
    "SpaceCreate",
    "SpaceUpdate",
    "Task",
    "TaskCreate",
    "TaskState",
    "User",
    # Manifests and packaging
    "AppManifest",
    "AppManifestDocker",
    "AppManifestRoute",
    "Manifest",
    "read_bits",
    "zip_directory",
    # Auth
    "AuthProvider",
    "Credentials",
    "get_access_token",
    "get_api_url",
    "load_credentials_from_file",
    # Exceptions
    "CloudFoundryError",
    "TransportError",
    "ConnectionError",
    "TimeoutError",
    "APIError",
    "AuthenticationError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "ValidationError",
    "RateLimitError",
    "PaginationError",
    "MalformedPaginationLinkError",
    "NoNextPageError",
    "AmbiguousResultError",
    "OperationFailedError",
    "PollTimeoutError",
    "PollCancelledError",
    "PushError",
]
