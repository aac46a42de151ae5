"""Command-line interface package for diffscribe."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv

from diffscribe import __version__
from diffscribe.utils.log_setup import log_environment_info, run_log_file, setup_logging

from .commit_cmd import register_command as register_commit_command

logger = logging.getLogger(__name__)

# Load environment variables (provider API keys) from .env.local, else .env
for env_file in (Path(".env.local"), Path(".env")):
	if env_file.exists():
		load_dotenv(dotenv_path=env_file)
		logger.debug("Loaded environment variables from %s", env_file)
		break

app = typer.Typer(
	help=f"diffscribe - AI-generated commit messages\n\nVersion: {__version__}",
	no_args_is_help=True,
	context_settings={"help_option_names": ["-h", "--help"]},
)

# --- Global Options Callback ---


def _version_callback(value: bool) -> None:
	"""Callback for --version option."""
	if value:
		typer.echo(f"diffscribe version: {__version__}")
		raise typer.Exit


@app.callback(invoke_without_command=True)
def global_options(
	is_verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose logging.")] = False,
	is_output_log: Annotated[
		bool,
		typer.Option(
			"--save-log",
			help="Enable logging to a file. Logs to logs/diffscribe_{datetime}.log.",
		),
	] = False,
	_version: Annotated[
		bool | None,
		typer.Option("--version", help="Show version and exit.", callback=_version_callback, is_eager=True),
	] = None,
) -> None:
	"""Global CLI options and logging setup."""
	setup_logging(is_verbose=is_verbose, log_file_path=run_log_file() if is_output_log else None)
	if is_verbose:
		log_environment_info()


# --- Register commands ---

register_commit_command(app)


# --- Main Entry Point ---
def main() -> int:
	"""Run the CLI application."""
	return app()


if __name__ == "__main__":
	sys.exit(main())
