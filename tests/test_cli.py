"""Tests for the command line launcher."""

import sys
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from timeless import __version__
from timeless.cli import APP_PATH, build_streamlit_argv, main


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestCli:
    """Test cases for the timeless launcher."""

    def test_app_path_points_at_main(self):
        assert APP_PATH.name == "main.py"
        assert APP_PATH.exists()

    def test_build_argv(self):
        assert build_streamlit_argv() == ["streamlit", "run", str(APP_PATH)]
        assert build_streamlit_argv(8600, ["--server.headless", "true"]) == [
            "streamlit",
            "run",
            str(APP_PATH),
            "--server.port",
            "8600",
            "--server.headless",
            "true",
        ]

    def test_version_option(self, runner):
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_option(self, runner):
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "--env-file" in result.output
        assert "--port" in result.output

    @patch("timeless.cli.load_dotenv")
    @patch("timeless.cli.stcli.main")
    def test_main_loads_env_file(self, mock_streamlit, mock_load_dotenv, runner, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("CLOUDINARY_CLOUD_NAME=demo\n")
        seen_argv = []
        mock_streamlit.side_effect = lambda: seen_argv.append(list(sys.argv)) or 0

        with patch.object(sys, "argv", ["timeless"]):
            result = runner.invoke(main, ["--env-file", str(env_file), "--port", "8600"])

        assert result.exit_code == 0
        assert seen_argv == [["streamlit", "run", str(APP_PATH), "--server.port", "8600"]]
        mock_load_dotenv.assert_called_once_with(dotenv_path=str(env_file))

    @patch("timeless.cli.load_dotenv")
    @patch("timeless.cli.stcli.main", return_value=0)
    def test_main_without_env_file(self, mock_streamlit, mock_load_dotenv, runner, tmp_path):
        with patch.object(sys, "argv", ["timeless"]):
            result = runner.invoke(main, ["--env-file", str(tmp_path / "missing.env")])

        assert result.exit_code == 0
        mock_load_dotenv.assert_not_called()
        mock_streamlit.assert_called_once()

    @patch("timeless.cli.stcli.main")
    def test_extra_args_pass_through(self, mock_streamlit, runner, tmp_path):
        seen_argv = []
        mock_streamlit.side_effect = lambda: seen_argv.append(list(sys.argv)) or 0

        with patch.object(sys, "argv", ["timeless"]):
            result = runner.invoke(
                main, ["--env-file", str(tmp_path / "missing.env"), "--server.headless", "true"]
            )

        assert result.exit_code == 0
        assert seen_argv == [["streamlit", "run", str(APP_PATH), "--server.headless", "true"]]

    @patch("timeless.cli.stcli.main", return_value=0)
    def test_invalid_port(self, mock_streamlit, runner):
        result = runner.invoke(main, ["--port", "eighty"])

        assert result.exit_code == 2
        mock_streamlit.assert_not_called()
