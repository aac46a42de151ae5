"""Command for generating a commit message from the staged diff."""

from __future__ import annotations

import logging
from typing import Annotated

import typer

logger = logging.getLogger(__name__)

# --- Command Argument Annotations ---

StageAllFlag = Annotated[
	bool,
	typer.Option("--all", "-a", help="Stage all changed files before generating the message"),
]

NotesOption = Annotated[
	str | None,
	typer.Option("--notes", "-n", help="Notes passed to the AI along with the diff (skips the prompt)"),
]

BypassHooksFlag = Annotated[
	bool, typer.Option("--bypass-hooks", "--no-verify", help="Bypass git hooks with --no-verify")
]

# --- Registration Function ---


def register_command(app: typer.Typer) -> None:
	"""Register the commit command with the CLI app."""

	@app.command(name="commit")
	def commit_command(
		stage_all: StageAllFlag = False,
		notes: NotesOption = None,
		bypass_hooks: BypassHooksFlag = False,
	) -> None:
		"""
		Generate a commit message for the staged changes and commit them.

		When nothing is staged you can stage everything or pick files
		interactively. After committing you are offered to push.

		"""
		_commit_command_impl(stage_all=stage_all, notes=notes, bypass_hooks=bypass_hooks)


# --- Implementation Function (Heavy imports deferred here) ---


def _commit_command_impl(stage_all: bool, notes: str | None, bypass_hooks: bool) -> None:
	"""Actual implementation of the commit command."""
	from diffscribe.commit import CommitCommand
	from diffscribe.config import ConfigError, ConfigLoader
	from diffscribe.git import GitError, get_repo_root
	from diffscribe.llm import LLMClient
	from diffscribe.utils.cli_utils import exit_with_error, handle_keyboard_interrupt

	try:
		try:
			repo_root = get_repo_root()
		except GitError:
			# CommitCommand.run reports this as NOT_A_REPO
			repo_root = None

		loader = ConfigLoader.get_instance(repo_root=repo_root)
		logger.debug("Configuration sources: %s", [str(p) for p in loader.sources] or "defaults")
		config = loader.get

		command = CommitCommand(
			config=config,
			llm_client=LLMClient(config.llm),
			path=repo_root,
			bypass_hooks=bypass_hooks,
		)
		outcome = command.run(stage_all=stage_all, notes=notes)
	except KeyboardInterrupt:
		handle_keyboard_interrupt()
	except ConfigError as e:
		exit_with_error(f"Invalid configuration: {e}", exception=e)
	except Exception as e:
		logger.exception("An unexpected error occurred during the commit command.")
		exit_with_error(f"An unexpected error occurred: {e}", exception=e)
	else:
		logger.debug("Exiting with status %d (%s)", outcome.exit_code, outcome.status.name)
		raise typer.Exit(outcome.exit_code)
