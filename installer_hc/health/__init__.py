"""Health subsystem — skip-list, policy, group evaluation and the check component."""

from .check import HC_NAME, InstallerHealthCheck
from .engine import Evaluation, evaluate, evaluate_group, execute_check
from .policy import EvaluationConfig, build_config
from .result import DiagnosticLog, HealthCheckResult, Severity, Status
from .skiplist import ConfigurationError, parse_skip_list
