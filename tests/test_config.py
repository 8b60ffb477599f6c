"""
Tests for configuration loading — cosi.yml parsing and env overrides.
"""

import textwrap
from pathlib import Path

import pytest

from cosi.core.config.loader import ConfigError, find_config_file, load_settings


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "cosi.yml"
    path.write_text(textwrap.dedent("""\
        host: 127.0.0.1
        port: 8080
        os_release_path: /tmp/os-release
        command_timeout: 600
        endpoints:
          kubernetes: false
    """))
    return path


class TestLoadSettings:
    def test_defaults_without_file(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("cosi.core.config.loader.SYSTEM_CONFIG_DIR", tmp_path / "etc")
        settings = load_settings(env={})
        assert settings.host == "0.0.0.0"
        assert settings.port == 80
        assert settings.os_release_path == "/etc/os-release"
        assert settings.search_path is None
        assert settings.command_timeout is None
        assert settings.endpoints.kubernetes is True

    def test_file_values(self, config_file: Path):
        settings = load_settings(config_file, env={})
        assert settings.host == "127.0.0.1"
        assert settings.port == 8080
        assert settings.os_release_path == "/tmp/os-release"
        assert settings.command_timeout == 600
        assert settings.endpoints.kubernetes is False
        assert settings.endpoints.binaries is True

    def test_empty_file_is_defaults(self, tmp_path: Path):
        path = tmp_path / "cosi.yml"
        path.write_text("")
        assert load_settings(path, env={}).port == 80

    def test_env_overrides_file(self, config_file: Path):
        settings = load_settings(config_file, env={
            "COSI_PORT": "9000",
            "COSI_OS_RELEASE": "/srv/os-release",
            "COSI_SEARCH_PATH": "/usr/bin",
        })
        assert settings.port == 9000
        assert settings.os_release_path == "/srv/os-release"
        assert settings.search_path == "/usr/bin"

    def test_plain_port_env(self, config_file: Path):
        assert load_settings(config_file, env={"PORT": "8081"}).port == 8081

    def test_cosi_port_beats_plain_port(self, config_file: Path):
        env = {"PORT": "8081", "COSI_PORT": "8082"}
        assert load_settings(config_file, env=env).port == 8082

    def test_missing_explicit_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_settings(tmp_path / "nope.yml", env={})

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "cosi.yml"
        path.write_text("port: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_settings(path, env={})

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "cosi.yml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_settings(path, env={})

    def test_invalid_port(self, tmp_path: Path):
        path = tmp_path / "cosi.yml"
        path.write_text("port: 70000\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_settings(path, env={})

    def test_invalid_env_value(self, config_file: Path):
        with pytest.raises(ConfigError):
            load_settings(config_file, env={"COSI_PORT": "eighty"})


class TestFindConfigFile:
    def test_prefers_start_dir(self, tmp_path: Path, config_file: Path):
        assert find_config_file(tmp_path) == config_file

    def test_falls_back_to_system_dir(self, tmp_path: Path, monkeypatch):
        system = tmp_path / "etc"
        system.mkdir()
        (system / "cosi.yml").write_text("port: 81\n")
        monkeypatch.setattr("cosi.core.config.loader.SYSTEM_CONFIG_DIR", system)
        empty = tmp_path / "empty"
        empty.mkdir()
        assert find_config_file(empty) == system / "cosi.yml"

    def test_none_when_absent(self, tmp_path: Path, monkeypatch):
        monkeypatch.setattr("cosi.core.config.loader.SYSTEM_CONFIG_DIR", tmp_path / "etc")
        assert find_config_file(tmp_path) is None
