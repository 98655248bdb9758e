"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from installer_hc.config import Settings
from installer_hc.installer.models import (
    ArtifactResource,
    ResourceGroup,
    ResourceState,
    ResourceType,
)
from installer_hc.installer.version import Version

APPS_PREFIX = "jcrinstall:/apps/"


def make_resource(
    type: ResourceType = ResourceType.BUNDLE,
    state: ResourceState = ResourceState.INSTALLED,
    url: str = APPS_PREFIX + "install/foo.jar",
    entity_id: str = "bundle:foo",
    version: str | None = None,
) -> ArtifactResource:
    return ArtifactResource(
        type=type,
        url=url,
        state=state,
        entity_id=entity_id,
        version=Version.parse(version) if version is not None else None,
    )


def make_group(*resources: ArtifactResource) -> ResourceGroup:
    return ResourceGroup(resources=resources)


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    """Settings built from keyword arguments only (no .env, no environment)."""

    def _make(**overrides) -> Settings:
        values = {
            "url_prefixes": [APPS_PREFIX],
            "check_bundles": True,
            "check_configurations": True,
            "allow_ignored_artifacts_in_group": False,
            "skip_entity_ids": [],
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def resource() -> Callable[..., ArtifactResource]:
    """Factory for artifact resources; defaults to an installed, in-scope bundle."""
    return make_resource


@pytest.fixture
def group() -> Callable[..., ResourceGroup]:
    return make_group
