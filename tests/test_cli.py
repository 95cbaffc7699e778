import csv
import io
import json
import logging
from unittest.mock import patch

import pytest

from readly import __version__
from readly import config as config_module
from readly.cli.main import main as cli_main
from readly.config import get_config_value, set_config_value

KINDLE_BASE_PATH_ENV_VAR = "READLY_KINDLE_BASE_PATH"

# --- Test Fixtures ---


@pytest.fixture(autouse=True)
def capture_logs(caplog):
    """Automatically capture logs for each test."""
    caplog.set_level(logging.DEBUG)
    return caplog


@pytest.fixture(autouse=True)
def mock_setup_logging():
    """Keep the CLI from replacing the root logging handlers."""
    with patch("readly.cli.main.setup_logging") as mock_setup:
        yield mock_setup


@pytest.fixture(autouse=True)
def isolated_environment(mock_config_dir, monkeypatch):
    """Use a temporary config directory and no base path from the environment."""
    monkeypatch.delenv(KINDLE_BASE_PATH_ENV_VAR, raising=False)
    return mock_config_dir


@pytest.fixture
def no_devices():
    with patch("readly.utils.device_detection.detect_kindle_devices", return_value=[]) as mock_detect:
        yield mock_detect


# --- Helper Function to Run CLI ---


def run_cli(args: list[str], expect_exit_code: int | None = 0):
    """Runs the CLI main function with given arguments, catching SystemExit."""
    with patch("sys.argv", ["readly", *args]):
        try:
            cli_main()
        except SystemExit as e:
            code = e.code or 0
            if expect_exit_code is None or code != expect_exit_code:
                pytest.fail(f"Expected exit code {expect_exit_code} but got {e.code}")
            return
    if expect_exit_code:
        pytest.fail(f"Expected SystemExit with code {expect_exit_code}, but no exit occurred")


# --- Test Cases ---


def test_cli_version_flag(capsys):
    run_cli(["--version"])
    assert f"readly {__version__}" in capsys.readouterr().out


def test_cli_help(capsys):
    run_cli(["--help"])
    captured = capsys.readouterr()
    assert "usage: readly" in captured.out
    assert "highlights" in captured.out


def test_cli_requires_command():
    run_cli([], expect_exit_code=2)


def test_cli_log_level_from_config(mock_setup_logging):
    set_config_value("log_level", "WARNING")
    run_cli(["version"])
    assert mock_setup_logging.call_args.kwargs["level"] == "WARNING"


def test_cli_log_level_argument(mock_setup_logging, tmp_path):
    log_file = tmp_path / "readly.log"
    run_cli(["--log-level", "debug", "--log-file", str(log_file), "version"])
    mock_setup_logging.assert_called_once_with(level="DEBUG", log_file=log_file)


def test_highlights_list_text(kindle_device, capsys):
    run_cli(["highlights", "list", "--base-path", str(kindle_device)])
    out = capsys.readouterr().out

    assert "Highlights (4 of 4)" in out
    assert "1. Dune (Frank Herbert)" in out
    assert "Fear is the mind-killer." in out
    assert "Meditations" not in out


def test_highlights_default_subcommand(kindle_device, capsys, monkeypatch):
    monkeypatch.setenv(KINDLE_BASE_PATH_ENV_VAR, str(kindle_device))
    run_cli(["highlights"])
    assert "Fear is the mind-killer." in capsys.readouterr().out


def test_highlights_list_json(kindle_device, capsys):
    run_cli(["highlights", "list", "-b", str(kindle_device), "--format", "json"])
    data = json.loads(capsys.readouterr().out)

    assert data["total"] == 4  # noqa: PLR2004
    assert data["highlights"][0] == {
        "title": "Dune",
        "author": "Frank Herbert",
        "content": "Fear is the mind-killer.",
    }


def test_highlights_list_csv(kindle_device, capsys):
    run_cli(["highlights", "list", "-b", str(kindle_device), "--format", "csv"])
    rows = list(csv.DictReader(io.StringIO(capsys.readouterr().out)))

    assert [row["title"] for row in rows] == [
        "Dune",
        "The Selfish Gene: 30th Anniversary Edition",
        "Collected Works (Vol 2)",
        "Dune",
    ]


def test_highlights_list_filters(kindle_device, capsys):
    run_cli(["highlights", "list", "-b", str(kindle_device), "--title", "dune", "--limit", "1", "--format", "json"])
    data = json.loads(capsys.readouterr().out)

    assert data["count"] == 1
    assert data["highlights"][0]["content"] == "Fear is the mind-killer."


def test_highlights_list_no_match(kindle_device, capsys):
    run_cli(["highlights", "list", "-b", str(kindle_device), "--author", "Tolkien"])
    assert "No highlights found." in capsys.readouterr().out


def test_highlights_list_multiline_flag(kindle_device, capsys):
    run_cli(["highlights", "list", "-b", str(kindle_device), "--multiline", "--format", "json"])
    data = json.loads(capsys.readouterr().out)

    assert data["total"] == 5  # noqa: PLR2004
    assert data["highlights"][2]["title"] == "Meditations"


def test_highlights_list_multiline_from_config(kindle_device, capsys):
    set_config_value("multiline_content", True)
    run_cli(["highlights", "list", "-b", str(kindle_device), "--format", "json"])
    assert json.loads(capsys.readouterr().out)["total"] == 5  # noqa: PLR2004


@pytest.mark.parametrize(("stored", "expected_total"), [("false", 4), ("off", 4), ("True", 5), ("yes", 5)])
def test_highlights_list_multiline_from_string_config(kindle_device, capsys, stored, expected_total):
    set_config_value("multiline_content", stored)
    run_cli(["highlights", "list", "-b", str(kindle_device), "--format", "json"])
    assert json.loads(capsys.readouterr().out)["total"] == expected_total


def test_highlights_books(kindle_device, capsys):
    run_cli(["highlights", "books", "-b", str(kindle_device), "--format", "json"])
    books = json.loads(capsys.readouterr().out)

    assert books == [
        {"title": "Dune", "author": "Frank Herbert", "highlight_count": 2},
        {"title": "The Selfish Gene: 30th Anniversary Edition", "author": "Richard Dawkins", "highlight_count": 1},
        {"title": "Collected Works (Vol 2)", "author": "Jane Doe", "highlight_count": 1},
    ]


def test_highlights_books_text(kindle_device, capsys):
    run_cli(["highlights", "books", "-b", str(kindle_device)])
    out = capsys.readouterr().out

    assert "Total: 4 highlights across 3 books" in out
    assert "The Selfish Gene: 30th Anniversary Ed..." in out


def test_highlights_base_path_from_environment(kindle_device, capsys, monkeypatch):
    monkeypatch.setenv(KINDLE_BASE_PATH_ENV_VAR, str(kindle_device))
    run_cli(["highlights", "list"])
    assert "Fear is the mind-killer." in capsys.readouterr().out


def test_highlights_base_path_from_config(kindle_device, capsys):
    set_config_value("kindle_base_path", str(kindle_device))
    run_cli(["highlights", "list"])
    assert "Fear is the mind-killer." in capsys.readouterr().out


def test_highlights_base_path_from_detected_device(kindle_device, capsys):
    with patch("readly.utils.device_detection.detect_kindle_devices", return_value=[("Kindle", kindle_device)]):
        run_cli(["highlights", "list"])
    assert "Fear is the mind-killer." in capsys.readouterr().out


@pytest.mark.usefixtures("no_devices")
def test_highlights_no_device(capsys):
    run_cli(["highlights", "list"], expect_exit_code=1)
    assert "No Kindle device found" in capsys.readouterr().err


def test_highlights_missing_clippings_file(tmp_path, capsys):
    run_cli(["highlights", "list", "-b", str(tmp_path)], expect_exit_code=1)
    err = capsys.readouterr().err

    assert "Unable to read the Kindle clippings file" in err
    assert "No such file or directory" in err


def test_devices_command(kindle_device, capsys):
    with patch("readly.cli.commands.devices.detect_kindle_devices", return_value=[("Kindle", kindle_device)]):
        run_cli(["devices"])
    out = capsys.readouterr().out

    assert "Detected 1 Kindle device(s):" in out
    assert str(kindle_device) in out


def test_devices_command_none_found(capsys):
    with patch("readly.cli.commands.devices.detect_kindle_devices", return_value=[]):
        run_cli(["devices"])
    assert "No Kindle devices detected." in capsys.readouterr().out


def test_config_show(capsys):
    run_cli(["config"])
    out = capsys.readouterr().out

    assert "--- Current Configuration ---" in out
    assert "kindle_base_path: [Not Set]" in out


def test_config_set_base_path(capsys):
    run_cli(["config", "set", "kindle_base_path", "/Volumes/Kindle"])

    assert "Configuration updated: kindle_base_path = /Volumes/Kindle" in capsys.readouterr().out
    assert get_config_value("kindle_base_path") == "/Volumes/Kindle"


def test_config_set_boolean():
    run_cli(["config", "set", "multiline_content", "yes"])
    assert get_config_value("multiline_content") is True


def test_config_set_invalid_value(capsys):
    run_cli(["config", "set", "log_level", "LOUD"], expect_exit_code=1)
    assert "Invalid log level" in capsys.readouterr().out


def test_config_set_unknown_key():
    run_cli(["config", "set", "api_token", "abc"], expect_exit_code=2)


def test_config_paths(isolated_environment, capsys):
    run_cli(["config", "paths"])
    out = capsys.readouterr().out

    assert f"Configuration directory: {isolated_environment}" in out
    assert f"Configuration file: {isolated_environment / 'config.json'}" in out


def test_config_paths_follows_config_directory(tmp_path, capsys):
    run_cli(["config", "paths"])
    capsys.readouterr()

    other_dir = tmp_path / "other-config"
    other_dir.mkdir()
    config_module.get_config_file_path.cache_clear()
    with patch("readly.config.get_config_dir", return_value=other_dir):
        run_cli(["config", "paths"])

    assert f"Configuration directory: {other_dir}" in capsys.readouterr().out


def test_config_file_not_an_object(isolated_environment, capsys):
    (isolated_environment / "config.json").write_text("1")
    run_cli(["config", "show"])
    assert "log_level: INFO" in capsys.readouterr().out


def test_version_command(capsys):
    run_cli(["version"])
    assert f"readly v{__version__}" in capsys.readouterr().out


def test_unhandled_exception_exits_with_error(capture_logs):
    with patch("readly.cli.commands.devices.detect_kindle_devices", side_effect=RuntimeError("boom")):
        run_cli(["devices"], expect_exit_code=1)
    assert "Unhandled exception: boom" in capture_logs.text
