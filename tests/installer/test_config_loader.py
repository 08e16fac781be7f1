from pathlib import Path

import pytest

from installer.config import LOG_FILE_DEFAULT
from installer.config_loader import (
    _deep_update,
    load_app_settings,
    resolve_config_path,
)


def test_defaults_without_config_file(mock_logger):
    settings = load_app_settings(current_logger=mock_logger)

    assert settings.log_file == LOG_FILE_DEFAULT
    assert settings.package_manager == "yum"
    assert settings.kubernetes_version == "v1.32"
    assert settings.symbols["success"] == "✅"


def test_environment_overrides_defaults(monkeypatch, mock_logger):
    monkeypatch.setenv("DEVOPS_PACKAGE_MANAGER", "dnf")
    monkeypatch.setenv("DEVOPS_LOG_FILE", "/tmp/custom.log")

    settings = load_app_settings(current_logger=mock_logger)

    assert settings.package_manager == "dnf"
    assert settings.log_file == "/tmp/custom.log"


def test_yaml_overrides_environment(tmp_path, monkeypatch, mock_logger):
    monkeypatch.setenv("DEVOPS_PACKAGE_MANAGER", "dnf")
    config_file = tmp_path / "installer.yaml"
    config_file.write_text(
        "package_manager: yum\n"
        "sonarqube_version: '10.6.0.92116'\n"
        "work_dir: /opt/devops\n"
        "symbols:\n"
        "  success: OK\n",
        encoding="utf-8",
    )

    settings = load_app_settings(config_file, current_logger=mock_logger)

    assert settings.package_manager == "yum"
    assert settings.sonarqube_version == "10.6.0.92116"
    assert settings.work_dir == Path("/opt/devops")
    assert settings.symbols["success"] == "OK"
    assert settings.symbols["error"] == "❌"


def test_config_path_from_environment(tmp_path, monkeypatch, mock_logger):
    config_file = tmp_path / "from_env.yaml"
    config_file.write_text("grafana_version: 12.0.0-1\n", encoding="utf-8")
    monkeypatch.setenv("DEVOPS_INSTALLER_CONFIG", str(config_file))

    assert resolve_config_path() == config_file
    assert load_app_settings(current_logger=mock_logger).grafana_version == "12.0.0-1"


def test_config_yaml_in_working_directory(tmp_path, mock_logger):
    (tmp_path / "config.yaml").write_text("nexus_version: 3.80.0-06\n", encoding="utf-8")

    assert load_app_settings(current_logger=mock_logger).nexus_version == "3.80.0-06"


def test_invalid_yaml_is_ignored_with_warning(tmp_path, mock_logger):
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("package_manager: [unclosed\n", encoding="utf-8")

    settings = load_app_settings(config_file, current_logger=mock_logger)

    assert settings.package_manager == "yum"
    mock_logger.warning.assert_called_once()


def test_non_mapping_yaml_is_ignored(tmp_path, mock_logger):
    config_file = tmp_path / "list.yaml"
    config_file.write_text("- a\n- b\n", encoding="utf-8")

    settings = load_app_settings(config_file, current_logger=mock_logger)

    assert settings.package_manager == "yum"
    mock_logger.warning.assert_called_once()


def test_invalid_value_raises_system_exit(tmp_path, mock_logger):
    config_file = tmp_path / "bad.yaml"
    config_file.write_text("jenkins_repo_url: not a url\n", encoding="utf-8")

    with pytest.raises(SystemExit, match="Configuration error"):
        load_app_settings(config_file, current_logger=mock_logger)

    mock_logger.error.assert_called_once()


def test_deep_update_merges_nested_and_skips_none():
    source = {"a": 1, "nested": {"x": 1, "y": 2}}

    result = _deep_update(source, {"a": None, "nested": {"y": 3}, "b": 4})

    assert result == {"a": 1, "nested": {"x": 1, "y": 3}, "b": 4}
