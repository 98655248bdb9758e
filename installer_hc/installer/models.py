"""Installer snapshot model — resources, groups and the installation state.

These mirror what the OSGi installer reports: every declared artifact is a
resource, and all resources competing for the same entity id form a group.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .version import Version


class ResourceType(str, Enum):
    BUNDLE = "bundle"
    CONFIGURATION = "config"
    OTHER = "other"

    @classmethod
    def from_string(cls, raw: str) -> ResourceType:
        """Map an installer type string; anything unknown is OTHER."""
        normalized = (raw or "").strip().lower()
        for member in (cls.BUNDLE, cls.CONFIGURATION):
            if normalized == member.value:
                return member
        return cls.OTHER


class ResourceState(str, Enum):
    INSTALL = "INSTALL"
    UNINSTALL = "UNINSTALL"
    INSTALLED = "INSTALLED"
    UNINSTALLED = "UNINSTALLED"
    IGNORED = "IGNORED"

    @property
    def is_unhealthy(self) -> bool:
        """Still waiting to be installed, or ignored by the installer."""
        return self in (ResourceState.INSTALL, ResourceState.IGNORED)


@dataclass(frozen=True)
class ArtifactResource:
    """One candidate artifact as seen by the installer."""

    type: ResourceType
    url: str
    state: ResourceState
    entity_id: str
    version: Version | None = None

    def __str__(self) -> str:
        if self.version is None:
            return f"{self.entity_id} ({self.url})"
        return f"{self.entity_id} {self.version} ({self.url})"


@dataclass(frozen=True)
class ResourceGroup:
    """All resources competing for the same entity id, in installer order."""

    resources: tuple[ArtifactResource, ...]

    def __post_init__(self) -> None:
        if not self.resources:
            raise ValueError("A resource group needs at least one resource")
        # Accept any sequence but store it immutably
        object.__setattr__(self, "resources", tuple(self.resources))

    @property
    def entity_id(self) -> str:
        return self.resources[0].entity_id


@dataclass(frozen=True)
class InstallationState:
    """Point-in-time view of the installer.

    ``installed_resources`` holds the groups the installer has processed;
    ``active_resources`` the ones it is still working on.
    """

    installed_resources: tuple[ResourceGroup, ...] = ()
    active_resources: tuple[ResourceGroup, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "installed_resources", tuple(self.installed_resources))
        object.__setattr__(self, "active_resources", tuple(self.active_resources))
