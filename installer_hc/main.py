"""Entry point for the installer health check — `installer-hc` console script."""

from __future__ import annotations

import argparse
import logging
import sys

import uvicorn
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import Settings, settings
from .health.check import InstallerHealthCheck
from .health.result import HealthCheckResult, Severity
from .health.skiplist import ConfigurationError
from .installer.provider import SnapshotError, YamlInfoProvider

console = Console()

EXIT_OK = 0
EXIT_UNHEALTHY = 1
EXIT_ERROR = 2

_SEVERITY_STYLES = {
    Severity.DEBUG: "dim",
    Severity.INFO: "",
    Severity.WARN: "yellow",
    Severity.CRITICAL: "bold red",
}


def run_server() -> None:
    """Start the FastAPI server."""
    console.print(Panel("Starting OSGi Installer Health Check API", style="bold green"))
    uvicorn.run(
        "installer_hc.api.server:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
    )


def run_check(args: argparse.Namespace) -> int:
    """Run one check against a YAML snapshot and print the result."""
    check_settings = _apply_overrides(settings, args)
    provider = YamlInfoProvider(check_settings.snapshot_path)

    try:
        check = InstallerHealthCheck(provider, check_settings)
        result = check.execute()
    except ConfigurationError as e:
        console.print(Panel(str(e), title="Configuration error", style="bold red"))
        return EXIT_ERROR
    except SnapshotError as e:
        console.print(Panel(str(e), title="Installation state unavailable", style="bold red"))
        return EXIT_ERROR

    _print_result(check, result)
    return EXIT_OK if result.ok else EXIT_UNHEALTHY


def _apply_overrides(base: Settings, args: argparse.Namespace) -> Settings:
    overrides = {}
    if args.snapshot:
        overrides["snapshot_path"] = args.snapshot
    if args.url_prefix:
        overrides["url_prefixes"] = args.url_prefix
    if args.skip:
        overrides["skip_entity_ids"] = args.skip
    if args.no_bundles:
        overrides["check_bundles"] = False
    if args.no_configurations:
        overrides["check_configurations"] = False
    if args.allow_ignored_artifacts_in_group:
        overrides["allow_ignored_artifacts_in_group"] = True
    return base.model_copy(update=overrides)


def _print_result(check: InstallerHealthCheck, result: HealthCheckResult) -> None:
    table = Table(title=check.name, show_header=True, header_style="bold")
    table.add_column("Severity")
    table.add_column("Message")
    for entry in result.entries:
        style = _SEVERITY_STYLES[entry.severity]
        table.add_row(entry.severity.name, entry.message, style=style or None)
    console.print(table)

    verdict_style = "bold green" if result.ok else "bold red"
    console.print(f"[{verdict_style}]{result.status.value}[/{verdict_style}] [dim]tags: {', '.join(check.tags)}[/dim]")


def main() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    parser = argparse.ArgumentParser(description="OSGi Installer Health Check")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("serve", help="Start the API server")

    check_parser = sub.add_parser("check", help="Check an installation state dump")
    check_parser.add_argument("--snapshot", help="YAML installation state (default: SNAPSHOT_PATH)")
    check_parser.add_argument(
        "--url-prefix", action="append", metavar="PREFIX",
        help="URL prefix to consider (repeatable, replaces the configured list)",
    )
    check_parser.add_argument(
        "--skip", action="append", metavar="ENTRY",
        help="Skip-list entry '<entity id> [<version>]' (repeatable)",
    )
    check_parser.add_argument("--no-bundles", action="store_true", help="Do not check bundles")
    check_parser.add_argument("--no-configurations", action="store_true", help="Do not check configurations")
    check_parser.add_argument(
        "--allow-ignored-artifacts-in-group", action="store_true",
        help="Accept uninstalled artifacts if another one of the group is installed",
    )

    args = parser.parse_args()

    if args.command == "serve":
        run_server()
    elif args.command == "check":
        sys.exit(run_check(args))
    else:
        parser.print_help()
        sys.exit(EXIT_ERROR)


if __name__ == "__main__":
    main()
