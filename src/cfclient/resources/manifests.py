"""Applying and generating app manifests."""

from __future__ import annotations

from ..manifest import Manifest
from .base import BaseClient


class ManifestClient(BaseClient):
    async def apply(self, space_guid: str, manifest: Manifest | str) -> str:
        """Apply a manifest to a space, creating or updating its apps.

        Args:
            space_guid: Target space.
            manifest: A Manifest or raw YAML text.

        Returns:
            GUID of the job applying the manifest.
        """
        text = manifest.to_yaml() if isinstance(manifest, Manifest) else manifest
        return await self._client.post_async(
            f"/v3/spaces/{space_guid}/actions/apply_manifest",
            content=text.encode("utf-8"),
            headers={"Content-Type": "application/x-yaml"},
        )

    async def generate(self, app_guid: str) -> str:
        """Return the YAML manifest describing an app as it currently runs."""
        return await self._client.get_text(f"/v3/apps/{app_guid}/manifest")
