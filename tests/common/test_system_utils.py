import subprocess

from common.system_utils import service_is_healthy


def test_service_is_healthy_running(mocker, app_settings, mock_logger):
    run_mock = mocker.patch(
        "common.system_utils.run_elevated_command",
        return_value=subprocess.CompletedProcess([], 0),
    )

    assert service_is_healthy("jenkins", app_settings, mock_logger) is True
    run_mock.assert_called_once_with(
        ["systemctl", "status", "jenkins", "--no-pager"],
        app_settings,
        capture_output=False,
        current_logger=mock_logger,
    )


def test_service_is_healthy_inactive(mocker, app_settings, mock_logger):
    mocker.patch(
        "common.system_utils.run_elevated_command",
        return_value=subprocess.CompletedProcess([], 3),
    )

    assert service_is_healthy("grafana-server", app_settings, mock_logger) is False


def test_service_is_healthy_without_systemctl(mocker, app_settings, mock_logger):
    mocker.patch(
        "common.system_utils.run_elevated_command",
        side_effect=FileNotFoundError(2, "No such file", "systemctl"),
    )

    assert service_is_healthy("docker", app_settings, mock_logger) is False
    mock_logger.warning.assert_called_once()
