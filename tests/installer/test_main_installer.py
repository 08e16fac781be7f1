import re
import subprocess
from unittest.mock import MagicMock

from installer import main_installer
from installer.main_installer import main, run_installer
from installer.menu import EXIT_OK, EXIT_STEP_FAILED


def test_run_installer_prerequisites_failure_skips_menu(
    mocker, app_settings
):
    mocker.patch(
        "installer.step_runner.run_elevated_command",
        return_value=subprocess.CompletedProcess([], 1),
    )
    run_menu = mocker.patch("installer.main_installer.run_menu")

    status = run_installer(app_settings, input_func=MagicMock())

    assert status == EXIT_STEP_FAILED
    run_menu.assert_not_called()


def test_run_installer_hands_over_to_menu(mocker, app_settings):
    mocker.patch(
        "installer.step_runner.run_elevated_command",
        return_value=subprocess.CompletedProcess([], 0),
    )
    fake_input = MagicMock(side_effect=["12"])

    status = run_installer(app_settings, input_func=fake_input, output_func=MagicMock())

    assert status == EXIT_OK
    fake_input.assert_called_once()


def test_main_writes_timestamped_log_and_closes_it(
    mocker, tmp_path, monkeypatch
):
    log_file = tmp_path / "devops_install.log"
    monkeypatch.setenv("DEVOPS_LOG_FILE", str(log_file))
    mocker.patch(
        "installer.step_runner.run_elevated_command",
        return_value=subprocess.CompletedProcess([], 0),
    )
    mocker.patch("installer.step_runner.command_exists", return_value=True)
    mocker.patch("builtins.input", side_effect=["1", "12"])
    shutdown = mocker.spy(main_installer, "shutdown_logging")

    status = main()

    assert status == EXIT_OK
    shutdown.assert_called_once()
    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert lines
    assert all(
        re.match(r"^\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\] ", line)
        for line in lines
    )
    assert any(line.endswith("✅ git installed successfully!") for line in lines)
    assert any(line.endswith("Exiting...") for line in lines)


def test_main_returns_one_when_step_fails(mocker, tmp_path, monkeypatch):
    monkeypatch.setenv("DEVOPS_LOG_FILE", str(tmp_path / "devops_install.log"))
    # Prerequisites succeed, the Docker script fails.
    mocker.patch(
        "installer.step_runner.run_command",
        return_value=subprocess.CompletedProcess([], 0),
    )
    mocker.patch(
        "installer.step_runner.run_elevated_command",
        side_effect=[
            subprocess.CompletedProcess([], 0),
            subprocess.CompletedProcess([], 0),
            subprocess.CompletedProcess([], 1),
        ],
    )
    mocker.patch("builtins.input", side_effect=["8"])

    assert main() == EXIT_STEP_FAILED
    log_text = (tmp_path / "devops_install.log").read_text(encoding="utf-8")
    assert "❌ Docker installation failed!" in log_text
