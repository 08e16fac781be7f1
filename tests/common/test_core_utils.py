import logging
import re

from common.core_utils import (
    BestEffortFileHandler,
    TimestampFormatter,
    level_from_name,
    setup_logging,
    shutdown_logging,
)

LINE_PATTERN = re.compile(r"^\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\] (.*)$")


def test_timestamp_formatter_layout():
    record = logging.LogRecord(
        "test", logging.INFO, __file__, 1, "✅ git installed successfully!", None, None
    )

    formatted = TimestampFormatter().format(record)

    match = LINE_PATTERN.match(formatted)
    assert match is not None
    assert match.group(1) == "✅ git installed successfully!"


def test_setup_logging_writes_to_file_and_console(tmp_path, capsys):
    log_file = tmp_path / "nested" / "devops_install.log"

    setup_logging(log_file=str(log_file), log_to_console=True)
    logging.getLogger("devops_installer").info("📦 Installing Git...")
    shutdown_logging()

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert any(
        LINE_PATTERN.match(line) and line.endswith("📦 Installing Git...")
        for line in lines
    )
    assert "📦 Installing Git..." in capsys.readouterr().out


def test_setup_logging_appends(tmp_path):
    log_file = tmp_path / "devops_install.log"
    log_file.write_text("[2024-01-01 00:00:00] earlier run\n", encoding="utf-8")

    setup_logging(log_file=str(log_file), log_to_console=False)
    logging.getLogger("devops_installer").info("later run")
    shutdown_logging()

    content = log_file.read_text(encoding="utf-8")
    assert content.startswith("[2024-01-01 00:00:00] earlier run\n")
    assert "later run" in content


def test_setup_logging_unwritable_path_falls_back_to_console(
    tmp_path, capsys
):
    blocker = tmp_path / "not_a_directory"
    blocker.write_text("", encoding="utf-8")

    setup_logging(log_file=str(blocker / "devops_install.log"), log_to_console=False)
    logging.getLogger("devops_installer").info("still visible")

    captured = capsys.readouterr()
    assert "Could not create file handler" in captured.err
    assert "still visible" in captured.out


def test_best_effort_handler_reports_write_failure_once(tmp_path, capsys):
    handler = BestEffortFileHandler(tmp_path / "devops_install.log")
    handler.setFormatter(TimestampFormatter())
    handler.stream.close()
    record = logging.LogRecord(
        "test", logging.INFO, __file__, 1, "message", None, None
    )

    handler.emit(record)
    handler.emit(record)

    err = capsys.readouterr().err
    assert err.count("Could not write to log file") == 1
    assert handler.write_failed is True


def test_shutdown_logging_removes_installed_handlers(tmp_path):
    setup_logging(log_file=str(tmp_path / "devops_install.log"))
    root_logger = logging.getLogger()
    installed = [
        h for h in root_logger.handlers if isinstance(h, BestEffortFileHandler)
    ]
    assert len(installed) == 1

    shutdown_logging()

    assert installed[0] not in root_logger.handlers


def test_level_from_name():
    assert level_from_name("debug") == logging.DEBUG
    assert level_from_name("WARNING") == logging.WARNING
    assert level_from_name("nonsense") == logging.INFO
