"""Skip-list — entity ids (optionally version-qualified) exempt from reporting.

Each entry has the format ``<entity id> [<version>]``. An id listed without a
version is skipped whatever its version; an id may be listed more than once
only if every entry carries a version.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Optional

from ..installer.version import Version

logger = logging.getLogger(__name__)

SkipEntries = Mapping[str, Optional[tuple[Version, ...]]]


class ConfigurationError(ValueError):
    """Raised when the health check policy is invalid."""


def parse_skip_list(entries: Iterable[str] | None) -> dict[str, tuple[Version, ...] | None]:
    """Parse skip-list entries into ``{entity_id: versions or None}``.

    Raises ConfigurationError on malformed versions and on an id that appears
    both with and without a version.
    """
    skip: dict[str, list[Version] | None] = {}
    for entry in entries or ():
        entry = entry.strip()
        if not entry:
            continue

        entity_id, sep, raw_version = entry.partition(" ")
        version = _parse_version(entity_id, raw_version) if sep else None

        if entity_id not in skip:
            skip[entity_id] = None if version is None else [version]
            continue

        versions = skip[entity_id]
        if versions is None or version is None:
            raise ConfigurationError(
                f"One entry with id '{entity_id}' contained no version limitation and "
                "there was another entry with the same id. This is an invalid combination. "
                "Please only list the same id more than once if different versions are given as well."
            )
        versions.append(version)

    logger.debug("Parsed skip-list with %d entity ids", len(skip))
    return {
        entity_id: None if versions is None else tuple(versions)
        for entity_id, versions in skip.items()
    }


def is_skipped(skip: SkipEntries, entity_id: str, version: Version | None) -> bool:
    """True if the skip-list exempts this entity id at this version."""
    if entity_id not in skip:
        return False
    versions = skip[entity_id]
    if versions is None:
        return True
    return version is not None and version in versions


def format_skip_list(skip: SkipEntries) -> list[str]:
    """Render parsed entries back into ``<entity id> [<version>]`` strings."""
    lines = []
    for entity_id, versions in skip.items():
        if versions is None:
            lines.append(entity_id)
        else:
            lines.extend(f"{entity_id} {v}" for v in versions)
    return lines


def _parse_version(entity_id: str, raw: str) -> Version:
    try:
        return Version.parse(raw)
    except ValueError as e:
        raise ConfigurationError(f"Invalid version for entity id '{entity_id}': {e}") from e
