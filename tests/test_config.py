"""Tests for configuration loading and precedence."""

import pytest

from args import parse_args
from cli_config import Settings, apply_config, load_config_file, load_settings
from constants import Constants
from errors import ConfigError


def _write(path, text):
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_defaults():
    settings = load_settings(parse_args(["--latest"]), environ={})
    assert settings == Settings()
    assert settings.metadata_url == Constants.METADATA_URL
    assert settings.installer_args == ["--makeOffline"]
    assert settings.library_dirs == ["libraries", "maven"]


def test_yaml_file_applies(tmp_path):
    cfg = _write(tmp_path / "forgepack.yml", (
        "java: /opt/jdk/bin/java\n"
        "output_dir: dist\n"
        "installer_args: [--makeOffline, --verbose]\n"
        "request_timeout: 5\n"
    ))
    settings = load_settings(parse_args(["--latest", "-c", cfg]), environ={})
    assert settings.java_bin == "/opt/jdk/bin/java"
    assert settings.output_dir == "dist"
    assert settings.installer_args == ["--makeOffline", "--verbose"]
    assert settings.request_timeout == 5.0


def test_json_file_is_accepted(tmp_path):
    cfg = _write(tmp_path / "forgepack.json", '{"work_dir": "tmp/work"}')
    assert load_config_file(cfg) == {"work_dir": "tmp/work"}


def test_config_path_from_environment(tmp_path):
    cfg = _write(tmp_path / "c.yml", "summary_file: out.txt\n")
    settings = load_settings(parse_args(["--latest"]), environ={Constants.ENV_CONFIG: cfg})
    assert settings.summary_file == "out.txt"


def test_precedence_cli_over_env_over_file(tmp_path):
    cfg = _write(tmp_path / "c.yml", "output_dir: from-file\nwork_dir: from-file\njava: file-java\n")
    environ = {Constants.ENV_OUTPUT_DIR: "from-env", Constants.ENV_WORK_DIR: "from-env"}
    args = parse_args(["--latest", "-c", cfg, "-o", "from-cli"])

    settings = load_settings(args, environ=environ)

    assert settings.output_dir == "from-cli"
    assert settings.work_dir == "from-env"
    assert settings.java_bin == "file-java"


def test_blank_env_values_are_ignored():
    settings = load_settings(None, environ={Constants.ENV_JAVA: "   "})
    assert settings.java_bin == "java"


def test_missing_file_only_warns(tmp_path, caplog):
    settings = load_settings(parse_args(["--latest", "-c", str(tmp_path / "absent.yml")]), environ={})
    assert settings == Settings()
    assert "Config file not found" in caplog.text


def test_empty_file(tmp_path):
    assert load_config_file(_write(tmp_path / "c.yml", "")) == {}


def test_invalid_yaml(tmp_path):
    with pytest.raises(ConfigError):
        load_config_file(_write(tmp_path / "c.yml", "key: [unclosed\n"))


def test_non_mapping(tmp_path):
    with pytest.raises(ConfigError):
        load_config_file(_write(tmp_path / "c.yml", "- a\n- b\n"))


def test_unknown_keys_warn(caplog):
    settings = apply_config(Settings(), {"colour": "blue", "work_dir": "w"})
    assert settings.work_dir == "w"
    assert "Ignoring unknown config key: colour" in caplog.text


def test_invalid_values():
    with pytest.raises(ConfigError):
        apply_config(Settings(), {"request_timeout": "soon"})
    with pytest.raises(ConfigError):
        apply_config(Settings(), {"library_dirs": 3})


def test_string_list_is_split():
    settings = apply_config(Settings(), {"installer_args": "--makeOffline --debug"})
    assert settings.installer_args == ["--makeOffline", "--debug"]
