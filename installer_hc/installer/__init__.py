"""Installer snapshot — resource model, versions and state providers."""

from .models import (
    ArtifactResource,
    InstallationState,
    ResourceGroup,
    ResourceState,
    ResourceType,
)
from .provider import InfoProvider, SnapshotError, StaticInfoProvider, YamlInfoProvider
from .version import Version

__all__ = [
    "ArtifactResource",
    "InfoProvider",
    "InstallationState",
    "ResourceGroup",
    "ResourceState",
    "ResourceType",
    "SnapshotError",
    "StaticInfoProvider",
    "Version",
    "YamlInfoProvider",
]
