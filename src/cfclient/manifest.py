"""Cloud Foundry application manifests."""

from __future__ import annotations

from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field


class _ManifestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class AppManifestDocker(_ManifestModel):
    image: str | None = None
    username: str | None = None


class AppManifestRoute(_ManifestModel):
    route: str


class AppManifest(_ManifestModel):
    """One application entry of a manifest."""

    name: str = Field(..., min_length=1)
    buildpacks: list[str] | None = None
    command: str | None = None
    disk_quota: str | None = None
    docker: AppManifestDocker | None = None
    env: dict[str, str] | None = None
    health_check_type: str | None = Field(None, alias="health-check-type")
    health_check_http_endpoint: str | None = Field(None, alias="health-check-http-endpoint")
    instances: int | None = Field(None, ge=0)
    log_rate_limit: str | None = Field(None, alias="log-rate-limit")
    memory: str | None = None
    no_route: bool | None = Field(None, alias="no-route")
    routes: list[AppManifestRoute] | None = None
    services: list[str] | None = None
    stack: str | None = None
    timeout: int | None = Field(None, ge=0)

    @classmethod
    def from_yaml(cls, text: str) -> AppManifest:
        """Parse a single-app manifest.

        Accepts either a bare application mapping or a document with an
        ``applications`` list holding exactly one entry.

        Raises:
            ValueError: If the YAML is invalid or does not describe one app.
        """
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid manifest YAML: {e}") from e

        if not isinstance(data, dict):
            raise ValueError("Manifest must be a YAML mapping")
        if "applications" in data:
            apps = data["applications"] or []
            if len(apps) != 1:
                raise ValueError(f"Expected one application in manifest, found {len(apps)}")
            data = apps[0]
        return cls.model_validate(data)


class Manifest(_ManifestModel):
    """A full manifest; the API only accepts the ``applications`` form."""

    applications: list[AppManifest] = Field(default_factory=list)

    @classmethod
    def for_app(cls, app: AppManifest) -> Manifest:
        return cls(applications=[app])

    def to_yaml(self) -> str:
        """Serialize with hyphenated keys and unset fields left out."""
        return yaml.safe_dump(self.to_dict(), sort_keys=False, default_flow_style=False)
