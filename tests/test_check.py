"""Tests for the InstallerHealthCheck component."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from installer_hc.health.check import HC_NAME, InstallerHealthCheck
from installer_hc.health.result import Status
from installer_hc.health.skiplist import ConfigurationError
from installer_hc.installer.models import InstallationState, ResourceState, ResourceType
from installer_hc.installer.provider import SnapshotError, StaticInfoProvider, YamlInfoProvider
from installer_hc.installer.version import Version


@pytest.fixture
def unhealthy_state(resource, group) -> InstallationState:
    return InstallationState(
        installed_resources=[
            group(resource(type=ResourceType.CONFIGURATION, state=ResourceState.INSTALL,
                           url="jcrinstall:/apps/config/foo.cfg", entity_id="config:foo")),
            group(resource(state=ResourceState.INSTALL, entity_id="bundle:foo")),
        ],
    )


class TestConfigure:
    def test_parses_skip_list(self, make_settings) -> None:
        check = InstallerHealthCheck(StaticInfoProvider(),
                                     make_settings(skip_entity_ids=["idA 1.0.0", "idA 2.0.0", "idB"]))
        assert check.configured
        assert check.config.skip_entries == {
            "idA": (Version.parse("1.0.0"), Version.parse("2.0.0")),
            "idB": None,
        }

    def test_conflicting_skip_list_refuses_to_configure(self, make_settings) -> None:
        with pytest.raises(ConfigurationError):
            InstallerHealthCheck(StaticInfoProvider(),
                                 make_settings(skip_entity_ids=["idA", "idA 2.0.0", "idB"]))

    def test_empty_skip_list(self, make_settings) -> None:
        check = InstallerHealthCheck(StaticInfoProvider(), make_settings(skip_entity_ids=[]))
        assert check.config.skip_entries == {}

    def test_failed_reconfigure_drops_previous_config(self, make_settings) -> None:
        check = InstallerHealthCheck(StaticInfoProvider(), make_settings())
        with pytest.raises(ConfigurationError):
            check.configure(make_settings(skip_entity_ids=["idA 1.0", "idA"]))
        assert not check.configured
        with pytest.raises(ConfigurationError, match="not configured"):
            check.execute()

    def test_reload_with_invalid_settings_drops_config(self, make_settings) -> None:
        check = InstallerHealthCheck(StaticInfoProvider(), make_settings())
        with pytest.raises(ConfigurationError, match="Invalid settings"):
            check.reload(lambda: make_settings(check_bundles="maybe"))
        assert not check.configured

    def test_reload_applies_new_settings(self, make_settings) -> None:
        check = InstallerHealthCheck(StaticInfoProvider(), make_settings())
        config = check.reload(lambda: make_settings(url_prefixes=["jcrinstall:/libs/"]))
        assert check.config is config
        assert config.url_prefixes == ("jcrinstall:/libs/",)

    def test_reconfigure_swaps_config(self, make_settings) -> None:
        check = InstallerHealthCheck(StaticInfoProvider(), make_settings())
        before = check.config
        check.configure(make_settings(check_bundles=False, hc_tags=["custom"]))
        assert check.config is not before
        assert before.check_bundles is True
        assert check.config.check_bundles is False
        assert check.tags == ("custom",)


class TestExecute:
    def test_name_and_default_tags(self, make_settings) -> None:
        check = InstallerHealthCheck(StaticInfoProvider(), make_settings())
        assert check.name == HC_NAME
        assert check.tags == ("installer", "osgi")

    def test_disabled_configurations(self, make_settings, unhealthy_state) -> None:
        check = InstallerHealthCheck(StaticInfoProvider(unhealthy_state),
                                     make_settings(check_configurations=False))
        result = check.execute()
        assert not result.ok
        assert result.status == Status.CRITICAL
        assert "Checked 1 OSGi bundle and 0 configuration groups." in str(result)

    def test_only_installed_resources_are_checked(self, make_settings, unhealthy_state) -> None:
        state = InstallationState(active_resources=unhealthy_state.installed_resources)
        result = InstallerHealthCheck(StaticInfoProvider(state), make_settings()).execute()
        assert result.ok

    def test_snapshot_captured_once_per_run(self, make_settings, unhealthy_state) -> None:
        provider = MagicMock()
        provider.get_installation_state.return_value = unhealthy_state
        check = InstallerHealthCheck(provider, make_settings())
        check.execute()
        check.execute()
        assert provider.get_installation_state.call_count == 2

    def test_malformed_snapshot_raises_snapshot_error(self, make_settings, tmp_path) -> None:
        path = tmp_path / "state.yaml"
        path.write_text(
            "installed:\n  - entity_id: bundle:x\n    resources:\n"
            "      - {type: bundle, url: null, state: INSTALLED}\n",
            encoding="utf-8",
        )
        check = InstallerHealthCheck(YamlInfoProvider(path), make_settings())
        with pytest.raises(SnapshotError):
            check.execute()
