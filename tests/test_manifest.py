"""Tests for manifest models."""

from __future__ import annotations

import pytest
import yaml

from cfclient import AppManifest, AppManifestRoute, Manifest


class TestAppManifestFromYaml:
    def test_bare_mapping(self):
        app = AppManifest.from_yaml("name: web\nmemory: 256M\ninstances: 2\n")

        assert app.name == "web"
        assert app.memory == "256M"
        assert app.instances == 2

    def test_applications_list(self):
        text = """
applications:
- name: web
  buildpacks: [python_buildpack]
  health-check-type: http
  health-check-http-endpoint: /health
  no-route: true
  routes:
  - route: web.apps.example.com
"""
        app = AppManifest.from_yaml(text)

        assert app.buildpacks == ["python_buildpack"]
        assert app.health_check_type == "http"
        assert app.health_check_http_endpoint == "/health"
        assert app.no_route is True
        assert app.routes == [AppManifestRoute(route="web.apps.example.com")]

    @pytest.mark.parametrize(
        "text",
        [
            "applications: []\n",
            "applications:\n- name: a\n- name: b\n",
        ],
    )
    def test_requires_exactly_one_app(self, text):
        with pytest.raises(ValueError, match="Expected one application"):
            AppManifest.from_yaml(text)

    def test_not_a_mapping(self):
        with pytest.raises(ValueError, match="mapping"):
            AppManifest.from_yaml("- web\n")

    def test_invalid_yaml(self):
        with pytest.raises(ValueError, match="Invalid manifest YAML"):
            AppManifest.from_yaml("name: [unclosed\n")


class TestManifestToYaml:
    """Tests for manifest serialization."""

    def test_hyphenated_keys_and_unset_fields(self):
        manifest = Manifest.for_app(
            AppManifest(
                name="web",
                disk_quota="1G",
                health_check_type="port",
                log_rate_limit="16K",
                no_route=False,
            )
        )

        data = yaml.safe_load(manifest.to_yaml())

        assert data == {
            "applications": [
                {
                    "name": "web",
                    "disk_quota": "1G",
                    "health-check-type": "port",
                    "log-rate-limit": "16K",
                    "no-route": False,
                }
            ]
        }

    def test_name_first(self):
        text = Manifest.for_app(AppManifest(name="web", stack="cflinuxfs4")).to_yaml()

        assert text.startswith("applications:\n- name: web\n")

    def test_round_trip_through_from_yaml(self):
        original = AppManifest(name="web", env={"A": "1"}, timeout=60)

        parsed = AppManifest.from_yaml(Manifest.for_app(original).to_yaml())

        assert parsed == original
