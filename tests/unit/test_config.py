"""Unit tests for configuration loading."""

import logging

import pytest

from g1c.core.config import (
    ConfigLoader,
    InvalidConfigurationError,
    default_config_path,
    resolve_refresh_interval,
)


@pytest.fixture
def loader():
    return ConfigLoader()


@pytest.fixture
def write_config(tmp_path):
    """Write YAML text to a temporary config file and return its path."""

    def _write(text: str) -> str:
        path = tmp_path / "config.yaml"
        path.write_text(text)
        return str(path)

    return _write


def test_missing_file_yields_empty_config(loader, tmp_path):
    assert loader.load_config(str(tmp_path / "absent.yaml")) == {}


def test_load_config_reads_yaml(loader, write_config):
    path = write_config("project: my-project\nregion: europe-west1\nrefresh_interval: 10\n")

    assert loader.load_config(path) == {
        "project": "my-project",
        "region": "europe-west1",
        "refresh_interval": 10,
    }


def test_load_config_resolves_interpolation(loader, write_config):
    path = write_config("project: my-project\nlog_file: /tmp/${project}.log\n")

    assert loader.load_config(path)["log_file"] == "/tmp/my-project.log"


def test_load_config_uses_env_var(loader, write_config, monkeypatch):
    monkeypatch.setenv("G1C_CONFIG", write_config("region: asia-east1\n"))

    assert loader.load_config() == {"region": "asia-east1"}


def test_default_config_path_honours_xdg(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    assert default_config_path() == tmp_path / "g1c" / "config.yaml"


def test_invalid_yaml_raises(loader, write_config):
    path = write_config("project: [unclosed\n")

    with pytest.raises(InvalidConfigurationError, match="Invalid YAML"):
        loader.load_config(path)


def test_non_mapping_raises(loader, write_config):
    path = write_config("- a\n- b\n")

    with pytest.raises(InvalidConfigurationError, match="mapping"):
        loader.load_config(path)


def test_undefined_interpolation_raises(loader, write_config):
    path = write_config("log_file: ${missing}\n")

    with pytest.raises(InvalidConfigurationError, match="resolution"):
        loader.load_config(path)


def test_empty_file_yields_empty_config(loader, write_config):
    assert loader.load_config(write_config("")) == {}


def test_merge_config_over_defaults(loader):
    merged = loader.merge_config({"project": "p", "log_level": None})

    assert merged["project"] == "p"
    assert merged["region"] == "us-central1"
    assert merged["refresh_interval"] == 5
    assert merged["log_level"] == "info"
    assert loader.BUILT_IN_DEFAULTS["project"] is None


@pytest.mark.parametrize("value", [0, -3, "fast", 2.5, True])
def test_invalid_refresh_interval_keeps_current(value, caplog):
    with caplog.at_level(logging.WARNING):
        assert resolve_refresh_interval(5, value) == 5

    assert "Invalid refresh interval" in caplog.text


def test_valid_refresh_interval_replaces_current():
    assert resolve_refresh_interval(5, 30) == 30
    assert resolve_refresh_interval(5, None) == 5


def test_cli_overrides_win_over_file(loader):
    config = loader.merge_config({"project": "from-file", "refresh_interval": 10})

    loader.apply_cli_overrides(config, project="from-cli", refresh=20)

    assert config["project"] == "from-cli"
    assert config["refresh_interval"] == 20


def test_invalid_cli_refresh_keeps_file_value(loader):
    config = loader.merge_config({"refresh_interval": 10})

    loader.apply_cli_overrides(config, refresh=-1)

    assert config["refresh_interval"] == 10


@pytest.mark.parametrize(
    "overrides,message",
    [
        ({"region": ""}, "region"),
        ({"region": 5}, "region"),
        ({"project": 123}, "project"),
        ({"log_level": "loud"}, "log_level"),
        ({"log_format": "xml"}, "log_format"),
        ({"credentials_path": ["a"]}, "credentials_path"),
    ],
)
def test_validate_config_rejects_bad_values(loader, overrides, message):
    config = loader.merge_config({})
    config.update(overrides)

    with pytest.raises(InvalidConfigurationError, match=message):
        loader.validate_config(config)


def test_build_config_falls_back_to_defaults_on_broken_file(loader, write_config):
    path = write_config("project: [unclosed\n")

    config = loader.build_config(path, region="europe-west1")

    assert config["project"] is None
    assert config["region"] == "europe-west1"


def test_build_config_rejects_invalid_values(loader, write_config):
    path = write_config("log_format: xml\n")

    with pytest.raises(InvalidConfigurationError):
        loader.build_config(path)
