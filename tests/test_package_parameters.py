"""
Tests for package parameter parsing and install argument building.
"""

import pytest

from installer_updater.core.errors import ConfigurationError
from installer_updater.core.models import FixedInputs
from installer_updater.core.services.installer_update.domain.package_parameters import (
    build_install_parameters,
    parse_package_parameters,
    render_overrides,
)


@pytest.fixture
def fixed() -> FixedInputs:
    return FixedInputs(
        package_name="visualstudio-installer",
        url="https://example.invalid/vs_bootstrapper.exe",
        checksum="abc123",
        checksum_type="sha256",
    )


class TestBuildInstallParameters:
    def test_bootstrapper_path_is_lifted_out(self, fixed):
        params = build_install_parameters(
            {"bootstrapperPath": "C:\\x.exe", "foo": "bar"}, fixed,
        )
        assert str(params.installer_file_path) == "C:\\x.exe"
        assert "bootstrapperPath" not in params.silent_args
        assert params.silent_args == "--quiet --foo bar --update"
        assert params.silent_args.endswith("--foo bar --update")

    def test_empty_overrides(self, fixed):
        params = build_install_parameters({}, fixed)
        assert params.silent_args == "--quiet  --update"
        assert params.installer_file_path is None

    def test_update_is_always_last(self, fixed):
        params = build_install_parameters({"update": "no", "locale": "en-US"}, fixed)
        assert params.silent_args.startswith("--quiet ")
        assert params.silent_args.endswith(" --update")
        assert params.silent_args == "--quiet --update no --locale en-US --update"

    def test_override_order_is_preserved(self, fixed):
        params = build_install_parameters({"b": "2", "a": "1", "c": "3"}, fixed)
        assert params.silent_args == "--quiet --b 2 --a 1 --c 3 --update"

    def test_fixed_inputs_are_carried(self, fixed):
        params = build_install_parameters({}, fixed)
        assert params.package_name == "visualstudio-installer"
        assert params.url == "https://example.invalid/vs_bootstrapper.exe"
        assert params.checksum == "abc123"
        assert params.checksum_type == "sha256"
        assert params.log_file_path is None
        assert params.is_2017_installer is True

    def test_caller_mapping_is_not_mutated(self, fixed):
        overrides = {"bootstrapperPath": "C:\\x.exe", "foo": "bar"}
        build_install_parameters(overrides, fixed)
        assert overrides == {"bootstrapperPath": "C:\\x.exe", "foo": "bar"}

    def test_empty_bootstrapper_path_means_download(self, fixed):
        params = build_install_parameters({"bootstrapperPath": ""}, fixed)
        assert params.installer_file_path is None
        assert params.silent_args == "--quiet  --update"


class TestRenderOverrides:
    def test_flag_without_value(self):
        assert render_overrides({"passive": "", "locale": "en-US"}) == "--passive --locale en-US"


class TestParsePackageParameters:
    def test_empty(self):
        assert parse_package_parameters(None) == {}
        assert parse_package_parameters("   ") == {}

    def test_double_dash_pairs(self):
        assert parse_package_parameters("--locale en-US --channelUri https://x/y") == {
            "locale": "en-US",
            "channelUri": "https://x/y",
        }

    def test_equals_form(self):
        assert parse_package_parameters("--locale=en-US") == {"locale": "en-US"}

    def test_slash_colon_form(self):
        assert parse_package_parameters("/bootstrapperPath:C:\\temp\\vs.exe /noWeb") == {
            "bootstrapperPath": "C:\\temp\\vs.exe",
            "noWeb": "",
        }

    def test_windows_path_keeps_backslashes(self):
        parsed = parse_package_parameters("--bootstrapperPath C:\\x.exe --foo bar")
        assert parsed == {"bootstrapperPath": "C:\\x.exe", "foo": "bar"}

    def test_quoted_value_with_spaces(self):
        parsed = parse_package_parameters('--installPath "C:\\Program Files\\VS"')
        assert parsed == {"installPath": "C:\\Program Files\\VS"}

    def test_quoted_value_attached_with_colon(self):
        parsed = parse_package_parameters('/installPath:"C:\\Program Files\\VS" /noWeb')
        assert parsed == {"installPath": "C:\\Program Files\\VS", "noWeb": ""}

    def test_quoted_value_attached_with_equals(self):
        parsed = parse_package_parameters("--installPath=\"C:\\Program Files\\VS\" --locale en-US")
        assert parsed == {"installPath": "C:\\Program Files\\VS", "locale": "en-US"}

    def test_absolute_posix_path_is_a_value(self):
        parsed = parse_package_parameters("--bootstrapperPath /opt/cache/vs.exe /noWeb")
        assert parsed == {"bootstrapperPath": "/opt/cache/vs.exe", "noWeb": ""}

    def test_quoted_dashes_are_a_value(self):
        assert parse_package_parameters('--note "--not-a-key"') == {"note": "--not-a-key"}

    def test_flags(self):
        assert parse_package_parameters("--passive --norestart") == {
            "passive": "",
            "norestart": "",
        }

    def test_last_occurrence_wins(self):
        assert parse_package_parameters("--locale de-DE --locale en-US") == {"locale": "en-US"}

    def test_unbalanced_quote_raises(self):
        with pytest.raises(ConfigurationError, match="Malformed"):
            parse_package_parameters('--installPath "C:\\Program Files')

    def test_stray_value_raises(self):
        with pytest.raises(ConfigurationError, match="Unexpected"):
            parse_package_parameters("locale en-US")

    def test_empty_key_raises(self):
        with pytest.raises(ConfigurationError, match="Empty parameter name"):
            parse_package_parameters("--=value")

    def test_parsed_then_built(self, fixed):
        overrides = parse_package_parameters("--bootstrapperPath C:\\x.exe --foo bar")
        params = build_install_parameters(overrides, fixed)
        assert str(params.installer_file_path) == "C:\\x.exe"
        assert params.silent_args.endswith("--foo bar --update")
