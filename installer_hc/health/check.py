"""The installer health check component.

Owns the snapshot provider and the active ``EvaluationConfig``. Reconfiguring
builds a complete new config and swaps it in with one assignment, so a
running ``execute()`` always sees either the old or the new policy.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from ..installer.provider import InfoProvider
from .engine import execute_check
from .policy import EvaluationConfig
from .result import HealthCheckResult
from .skiplist import ConfigurationError

logger = logging.getLogger(__name__)

HC_NAME = "OSGi Installer Health Check"
DEFAULT_TAGS = ("installer", "osgi")


class InstallerHealthCheck:
    """Checks that all OSGi configurations/bundles were installed by the OSGi installer."""

    name = HC_NAME

    def __init__(self, info_provider: InfoProvider, settings: Any | None = None) -> None:
        self.info_provider = info_provider
        self.tags: tuple[str, ...] = DEFAULT_TAGS
        self._config: EvaluationConfig | None = None
        if settings is not None:
            self.configure(settings)

    @property
    def config(self) -> EvaluationConfig | None:
        return self._config

    @property
    def configured(self) -> bool:
        return self._config is not None

    def configure(self, settings: Any) -> EvaluationConfig:
        """Apply new settings. On ConfigurationError the check is left unconfigured."""
        try:
            config = EvaluationConfig.from_settings(settings)
        except ConfigurationError:
            self._config = None
            logger.error("Rejected configuration for %s, check deactivated", self.name)
            raise

        self.tags = tuple(settings.hc_tags)
        self._config = config
        logger.info(
            "%s configured: prefixes=%s bundles=%s configurations=%s allow_ignored=%s skip=%d",
            self.name,
            list(config.url_prefixes),
            config.check_bundles,
            config.check_configurations,
            config.allow_ignored_artifacts_in_group,
            len(config.skip_entries),
        )
        return config

    def reload(self, load_settings: Callable[[], Any]) -> EvaluationConfig:
        """Load fresh settings and apply them.

        Settings that fail validation are a ConfigurationError too, and leave
        the check unconfigured.
        """
        try:
            settings = load_settings()
        except ValidationError as e:
            self._config = None
            logger.error("Rejected settings for %s, check deactivated", self.name)
            raise ConfigurationError(f"Invalid settings: {e}") from e
        return self.configure(settings)

    def execute(self) -> HealthCheckResult:
        """Run the check against one fresh snapshot of the installer state."""
        config = self._config
        if config is None:
            raise ConfigurationError(f"{self.name} is not configured")

        state = self.info_provider.get_installation_state()
        return execute_check(state.installed_resources, config)
