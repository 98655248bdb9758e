from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Central configuration loaded from environment / .env file."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # Health check registration
    hc_tags: list[str] = ["installer", "osgi"]

    # Only resources whose URL starts with one of these prefixes are checked.
    # List values come from the environment as JSON, e.g. URL_PREFIXES='["jcrinstall:/apps/"]'
    url_prefixes: list[str] = ["jcrinstall:/apps/"]
    check_bundles: bool = True
    check_configurations: bool = True

    # No finding for uninstalled artifacts if another one of the same group is installed
    allow_ignored_artifacts_in_group: bool = False

    # Entries of the form "<entity id> [<version>]"
    skip_entity_ids: list[str] = []

    # Installation state dump read by the YAML provider
    snapshot_path: str = "installation-state.yaml"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Logging
    log_level: str = "INFO"


settings = Settings()
