"""Command line launcher for the timeless Streamlit app."""

import os
import sys
from pathlib import Path

import click
import structlog
from dotenv import load_dotenv
from streamlit.web import cli as stcli

from timeless import __version__

logger = structlog.get_logger()

APP_PATH = Path(__file__).with_name("main.py")


def build_streamlit_argv(port: int | None = None, extra: list[str] | None = None) -> list[str]:
    """Arguments handed to ``streamlit run``."""
    argv = ["streamlit", "run", str(APP_PATH)]
    if port is not None:
        argv += ["--server.port", str(port)]
    return argv + list(extra or [])


@click.command(context_settings={"ignore_unknown_options": True})
@click.version_option(__version__, prog_name="timeless")
@click.option("--env-file", default=".env", show_default=True, help="Environment file to load")
@click.option("--port", type=int, default=None, help="Port for the Streamlit server")
@click.argument("streamlit_args", nargs=-1, type=click.UNPROCESSED)
def main(env_file: str, port: int | None, streamlit_args: tuple[str, ...]) -> None:
    """
    Run the timeless memories app.

    Any further arguments are passed on to ``streamlit run``.
    """
    if os.path.exists(env_file):
        logger.info(f"Loading environment variables from {env_file}")
        load_dotenv(dotenv_path=env_file)
    else:
        logger.warning(f"Environment file not found at {env_file}. Using existing environment.")

    sys.argv = build_streamlit_argv(port, list(streamlit_args))
    sys.exit(stcli.main())
