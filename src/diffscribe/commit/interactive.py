"""Interactive prompts and console output for the commit workflow."""

from __future__ import annotations

import logging

import questionary
from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.text import Text

logger = logging.getLogger(__name__)


def _require_value(value: str) -> bool | str:
	return True if value.strip() else "Value is required!"


class CommitUI:
	"""
	Interactive UI for the commit process.

	Every prompt returns ``None`` when the user cancels it (Ctrl-C or Esc), which
	is distinct from an explicit "no".

	"""

	def __init__(self, console: Console | None = None) -> None:
		"""Initialize the commit UI."""
		self.console = console or Console()

	# --- Prompts ---

	def confirm(self, message: str, default: bool = True) -> bool | None:
		"""
		Ask a yes/no question.

		Returns:
		    True or False for an answer, None if the prompt was cancelled

		"""
		answer = questionary.confirm(message, default=default).ask()
		logger.debug("Confirm %r -> %r", message, answer)
		return answer

	def select_files(self, files: list[str]) -> list[str] | None:
		"""
		Let the user pick files to stage.

		Args:
		    files: Candidate file paths

		Returns:
		    The selected paths in listing order, or None if cancelled

		"""
		selected = questionary.checkbox(
			"Select the files you want to add to the commit:",
			choices=[questionary.Choice(title=file, value=file) for file in files],
		).ask()
		if selected is None:
			return None
		chosen = set(selected)
		return [file for file in files if file in chosen]

	def ask_notes(self) -> str | None:
		"""
		Prompt for free-text notes to pass to the AI.

		Returns:
		    The non-empty notes, or None if cancelled

		"""
		notes = questionary.text(
			"Please enter any text you want to pass:",
			validate=_require_value,
		).ask()
		return notes.strip() if notes is not None else None

	# --- Output ---

	def show_intro(self, title: str) -> None:
		"""Print the run header."""
		self.console.print(Rule(f"[bold cyan]{title}[/]", style="cyan"))

	def show_staged_files(self, files: list[str]) -> None:
		"""List the files that will be committed."""
		self.console.print(f"\n[bold blue]{len(files)} staged file{'s' if len(files) != 1 else ''}:[/]")
		for file in files:
			self.console.print(f"  • {file}", markup=False)

	def show_commit_message(self, message: str) -> None:
		"""Show the generated commit message."""
		self.console.print(
			Panel(Text(message), title="Commit message", title_align="left", border_style="grey50", expand=False)
		)

	def show_message(self, message: str) -> None:
		"""Print a plain informational message."""
		self.console.print(message, markup=False, highlight=False)

	def show_success(self, message: str) -> None:
		"""Show a success message."""
		self.console.print(Text.assemble(("✓ ", "bold green"), message))

	def show_error(self, message: str) -> None:
		"""Show an error message."""
		self.console.print(Text.assemble(("✗ ", "bold red"), message))

	def show_cancelled(self) -> None:
		"""Report that the user aborted the run."""
		self.console.print("[grey50]✗[/] process cancelled")
