"""
Logging setup for diffscribe.

Log records go to stderr through rich so they never interleave with the
questionary prompts and commit output on stdout. ``--save-log`` adds a
DEBUG-level file under ``logs/`` for the whole run, including litellm's
request logging, which is otherwise held at ERROR.

"""

from __future__ import annotations

import datetime
import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.rule import Rule
from rich.text import Text

console = Console()
log_console = Console(stderr=True)

# Chatty HTTP and provider SDK loggers pulled in by litellm
NOISY_LOGGERS = ("litellm", "LiteLLM", "LiteLLM Router", "LiteLLM Proxy", "httpx", "httpcore", "openai")

LOG_DIR = Path("logs")
FILE_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s"


def run_log_file(now: datetime.datetime | None = None, log_dir: Path = LOG_DIR) -> Path:
	"""Path of the log file for a run started at ``now`` (UTC)."""
	started = now or datetime.datetime.now(tz=datetime.UTC)
	return log_dir / f"diffscribe_{started.strftime('%Y-%m-%d_%H-%M-%S')}.log"


def _quiet_third_party(is_verbose: bool, capture_to_file: bool) -> None:
	# The file handler wants everything; the console only wants errors
	level = logging.NOTSET if is_verbose or capture_to_file else logging.ERROR
	for name in NOISY_LOGGERS:
		logging.getLogger(name).setLevel(level)


def setup_logging(is_verbose: bool = False, log_file_path: Path | str | None = None) -> None:
	"""
	Set up logging for a CLI run.

	Args:
	    is_verbose: Show DEBUG records on the console instead of WARNING and up
	    log_file_path: Optional file receiving every record at DEBUG level

	"""
	console_level = logging.DEBUG if is_verbose else logging.WARNING

	root_logger = logging.getLogger()
	root_logger.setLevel(logging.DEBUG if log_file_path else console_level)

	# Clear existing handlers to avoid duplicate logs if called multiple times
	for handler in root_logger.handlers[:]:
		root_logger.removeHandler(handler)

	console_handler = RichHandler(
		console=log_console,
		level=console_level,
		rich_tracebacks=True,
		show_time=is_verbose,
		show_path=is_verbose,
	)
	root_logger.addHandler(console_handler)

	if log_file_path:
		try:
			file_handler_path = Path(log_file_path)
			file_handler_path.parent.mkdir(parents=True, exist_ok=True)

			file_handler = logging.FileHandler(file_handler_path, mode="a", encoding="utf-8")
			file_handler.setLevel(logging.DEBUG)
			file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
			root_logger.addHandler(file_handler)
			root_logger.debug("Logging to file: %s", file_handler_path)
		except OSError as e:
			log_console.print(f"[bold red]Failed to set up file logging to {log_file_path}: {e}[/]")
			log_file_path = None

	_quiet_third_party(is_verbose, capture_to_file=bool(log_file_path))


def log_environment_info() -> None:
	"""Log the versions that matter when reporting a bad generation or git failure."""
	import platform
	import shutil
	import subprocess
	from importlib.metadata import PackageNotFoundError, version

	from diffscribe import __version__

	logger = logging.getLogger(__name__)
	logger.info("diffscribe version: %s", __version__)
	logger.info("Python version: %s", platform.python_version())
	logger.info("Platform: %s", platform.platform())

	try:
		logger.info("litellm version: %s", version("litellm"))
	except PackageNotFoundError:
		logger.warning("litellm is not installed")

	git_path = shutil.which("git")
	if git_path is None:
		logger.warning("git executable not found on PATH")
		return
	result = subprocess.run([git_path, "--version"], capture_output=True, text=True, check=False)  # noqa: S603
	logger.info("Git: %s", result.stdout.strip() or git_path)


def display_error_summary(error_message: str) -> None:
	"""
	Display an error summary with a divider and a title.

	Args:
	        error_message: The error message to display

	"""
	title = Text("Error Summary", style="bold red")

	console.print()
	console.print(Rule(title, style="red"))
	console.print(f"\n{error_message}\n", markup=False)
	console.print(Rule(style="red"))
	console.print()
