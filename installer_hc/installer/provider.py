"""Snapshot providers — where the installation state comes from.

The health check only ever reads through ``InfoProvider``. ``YamlInfoProvider``
loads a state dump from disk on every call, ``StaticInfoProvider`` hands out a
fixed in-memory state.

YAML layout::

    installed:
      - entity_id: bundle:org.example.foo
        resources:
          - type: bundle
            url: jcrinstall:/apps/example/install/foo-1.0.0.jar
            state: INSTALLED
            version: 1.0.0
    active: []
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Protocol

import yaml

from .models import (
    ArtifactResource,
    InstallationState,
    ResourceGroup,
    ResourceState,
    ResourceType,
)
from .version import Version

logger = logging.getLogger(__name__)


class SnapshotError(RuntimeError):
    """Raised when the installation state cannot be read."""


class InfoProvider(Protocol):
    def get_installation_state(self) -> InstallationState: ...


class StaticInfoProvider:
    """Serves the same installation state on every call."""

    def __init__(self, state: InstallationState | None = None) -> None:
        self.state = state or InstallationState()

    def get_installation_state(self) -> InstallationState:
        return self.state


class YamlInfoProvider:
    """Reads the installation state from a YAML dump, fresh on every call."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def get_installation_state(self) -> InstallationState:
        if not self._path.exists():
            raise SnapshotError(f"Installation state file not found: {self._path}")

        try:
            raw = yaml.safe_load(self._path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            raise SnapshotError(f"Failed to read {self._path}: {e}") from e

        raw = raw or {}
        if not isinstance(raw, dict):
            raise SnapshotError(f"{self._path}: expected a mapping at the top level")

        state = InstallationState(
            installed_resources=_parse_groups(raw.get("installed")),
            active_resources=_parse_groups(raw.get("active")),
        )
        logger.debug(
            "Loaded %d installed and %d active groups from %s",
            len(state.installed_resources), len(state.active_resources), self._path,
        )
        return state


# ── Parsers ──────────────────────────────────────────────────────────────────


def _parse_groups(raw_groups: Any) -> tuple[ResourceGroup, ...]:
    groups = []
    for index, raw in enumerate(raw_groups or []):
        try:
            groups.append(_parse_group(raw))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise SnapshotError(f"Malformed resource group #{index}: {e}") from e
    return tuple(groups)


def _parse_group(raw: Any) -> ResourceGroup:
    if isinstance(raw, list):
        group_entity_id = ""
        raw_resources = raw
    else:
        group_entity_id = raw.get("entity_id", "")
        raw_resources = raw.get("resources") or []

    return ResourceGroup(
        resources=tuple(_parse_resource(r, group_entity_id) for r in raw_resources),
    )


def _parse_resource(raw: dict[str, Any], group_entity_id: str) -> ArtifactResource:
    entity_id = raw.get("entity_id", group_entity_id)
    if not entity_id or not isinstance(entity_id, str):
        raise ValueError(f"resource entity id must be a non-empty string, got {entity_id!r}")

    url = raw["url"]
    if not isinstance(url, str):
        raise ValueError(f"resource url must be a string, got {url!r}")

    raw_version = raw.get("version")
    return ArtifactResource(
        type=ResourceType.from_string(str(raw.get("type", ""))),
        url=url,
        state=ResourceState(str(raw["state"]).upper()),
        entity_id=entity_id,
        version=Version.parse(str(raw_version)) if raw_version is not None else None,
    )
