"""Evaluation policy — the immutable configuration a check run reads."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .skiplist import ConfigurationError, SkipEntries, format_skip_list, parse_skip_list


@dataclass(frozen=True)
class EvaluationConfig:
    """Policy for one configuration generation. Replaced, never mutated."""

    url_prefixes: tuple[str, ...] = ()
    check_bundles: bool = True
    check_configurations: bool = True
    allow_ignored_artifacts_in_group: bool = False
    skip_entries: SkipEntries = field(default_factory=lambda: MappingProxyType({}))

    def in_scope(self, url: str) -> bool:
        """A resource is in scope iff its URL starts with a configured prefix."""
        return any(url.startswith(prefix) for prefix in self.url_prefixes)

    @classmethod
    def from_settings(cls, settings: Any) -> EvaluationConfig:
        return build_config(
            url_prefixes=settings.url_prefixes,
            check_bundles=settings.check_bundles,
            check_configurations=settings.check_configurations,
            allow_ignored_artifacts_in_group=settings.allow_ignored_artifacts_in_group,
            skip_entity_ids=settings.skip_entity_ids,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "url_prefixes": list(self.url_prefixes),
            "check_bundles": self.check_bundles,
            "check_configurations": self.check_configurations,
            "allow_ignored_artifacts_in_group": self.allow_ignored_artifacts_in_group,
            "skip_entity_ids": format_skip_list(self.skip_entries),
        }


def build_config(
    url_prefixes: Iterable[str] = (),
    check_bundles: bool = True,
    check_configurations: bool = True,
    allow_ignored_artifacts_in_group: bool = False,
    skip_entity_ids: Iterable[str] | None = None,
) -> EvaluationConfig:
    """Build an EvaluationConfig from raw policy values.

    Raises ConfigurationError if the skip-list is invalid; no partial config
    is ever returned.
    """
    try:
        skip_entries = parse_skip_list(skip_entity_ids)
    except ConfigurationError as e:
        raise ConfigurationError(f"Invalid configuration in 'skip_entity_ids': {e}") from e

    return EvaluationConfig(
        url_prefixes=tuple(url_prefixes or ()),
        check_bundles=check_bundles,
        check_configurations=check_configurations,
        allow_ignored_artifacts_in_group=allow_ignored_artifacts_in_group,
        skip_entries=MappingProxyType(skip_entries),
    )
