"""Group evaluation engine — decides which installer groups are healthy.

Walks the resource groups of an installation snapshot, keeps only bundles and
configurations whose URL matches a configured prefix, and reports every
artifact the installer left uninstalled unless the skip-list exempts it.
Evaluation is a pure read of its inputs; findings go into a fresh
``DiagnosticLog``, never into exceptions.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from ..installer.models import ArtifactResource, ResourceGroup, ResourceType
from .policy import EvaluationConfig
from .result import DiagnosticLog, HealthCheckResult, Severity
from .skiplist import is_skipped

logger = logging.getLogger(__name__)

DOCUMENTATION_URL = "https://sling.apache.org/documentation/bundles/osgi-installer.html#health-check"


@dataclass
class Evaluation:
    """Outcome of evaluating all groups, before the summary lines are added."""

    log: DiagnosticLog
    bundle_groups_checked: int = 0
    config_groups_checked: int = 0


def evaluate(groups: Iterable[ResourceGroup], config: EvaluationConfig) -> Evaluation:
    """Evaluate every group and count the relevant bundle and config groups."""
    evaluation = Evaluation(log=DiagnosticLog())
    for group in groups:
        resource_type = evaluate_group(group, config, evaluation.log)
        if resource_type is ResourceType.CONFIGURATION:
            evaluation.config_groups_checked += 1
        elif resource_type is ResourceType.BUNDLE:
            evaluation.bundle_groups_checked += 1
        else:
            logger.debug("Group '%s' not considered by this check", group.entity_id)
    return evaluation


def evaluate_group(
    group: ResourceGroup, config: EvaluationConfig, log: DiagnosticLog,
) -> ResourceType | None:
    """Evaluate a single group.

    Returns the type of the last in-scope resource, or None if the group was
    not considered at all (wrong type, type disabled, or no resource matched
    a URL prefix).
    """
    invalid_resource: ArtifactResource | None = None
    group_type: ResourceType | None = None

    for resource in group.resources:
        if resource.type is ResourceType.CONFIGURATION:
            if not config.check_configurations:
                logger.debug("Skip resource '%s', configuration checks are disabled", resource.entity_id)
                return None
        elif resource.type is ResourceType.BUNDLE:
            if not config.check_bundles:
                logger.debug("Skip resource '%s', bundle checks are disabled", resource.entity_id)
                return None
        else:
            logger.debug(
                "Skip resource '%s' as it is neither a bundle nor a configuration",
                resource.entity_id,
            )
            return None

        if not config.in_scope(resource.url):
            logger.debug(
                "Skipping resource '%s' as its URL is not starting with any of these prefixes %s",
                resource, list(config.url_prefixes),
            )
            continue

        group_type = resource.type
        if resource.state.is_unhealthy:
            if not config.allow_ignored_artifacts_in_group:
                report_invalid_resource(resource, resource.type, config, log)
            elif invalid_resource is None:
                invalid_resource = resource
        elif config.allow_ignored_artifacts_in_group:
            # One installed artifact makes the whole group healthy
            return group_type

    if invalid_resource is not None:
        report_invalid_resource(invalid_resource, invalid_resource.type, config, log)

    return group_type


def report_invalid_resource(
    resource: ArtifactResource,
    resource_type: ResourceType,
    config: EvaluationConfig,
    log: DiagnosticLog,
) -> None:
    """Log a critical finding for an uninstalled resource unless it is skipped."""
    if is_skipped(config.skip_entries, resource.entity_id, resource.version):
        logger.debug("Skipping not installed resource '%s' as it is in the skip list", resource)
        return

    if resource_type is ResourceType.CONFIGURATION:
        log.critical(
            f"The installer state of the OSGi configuration resource '{resource}' is "
            f"{resource.state.value}, config might have been manually overwritten!"
        )
    else:
        log.critical(
            f"The installer state of the OSGi bundle resource '{resource}' is "
            f"{resource.state.value}, probably because a later or the same version "
            "of that bundle is already installed!"
        )


def execute_check(groups: Iterable[ResourceGroup], config: EvaluationConfig) -> HealthCheckResult:
    """Evaluate the groups and turn the log into a pass/fail result."""
    evaluation = evaluate(groups, config)
    log = evaluation.log
    log.info(
        f"Checked {evaluation.bundle_groups_checked} OSGi bundle and "
        f"{evaluation.config_groups_checked} configuration groups."
    )
    if log.aggregate_severity >= Severity.WARN:
        log.info(
            f"Refer to the OSGi installer's documentation page at {DOCUMENTATION_URL} "
            "for further details on how to fix those issues."
        )

    result = HealthCheckResult.from_log(log)
    logger.debug(
        "Installer check: %s (%d bundle / %d configuration groups)",
        result.status.value, evaluation.bundle_groups_checked, evaluation.config_groups_checked,
    )
    return result
