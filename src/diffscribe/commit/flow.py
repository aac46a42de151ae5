"""Generate, confirm, commit and optionally push."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from diffscribe import git
from diffscribe.git import GitError
from diffscribe.utils.cli_utils import loading_spinner

from .generator import GenerationError, describe_generation_error
from .outcome import CommitOutcome, CommitStatus

if TYPE_CHECKING:
	from pathlib import Path

	from .generator import CommitMessageGenerator
	from .interactive import CommitUI

logger = logging.getLogger(__name__)


class ConfirmationFlow:
	"""Walks the user from a generated message to a commit and an optional push."""

	def __init__(
		self,
		generator: CommitMessageGenerator,
		ui: CommitUI,
		bypass_hooks: bool = False,
		repo_root: Path | None = None,
	) -> None:
		"""
		Initialize the flow.

		Args:
		    generator: Produces the commit message
		    ui: Interactive UI used for prompts and messages
		    bypass_hooks: Whether to commit with ``--no-verify``
		    repo_root: Repository root to run git commit and push in

		"""
		self.generator = generator
		self.ui = ui
		self.bypass_hooks = bypass_hooks
		self.repo_root = repo_root

	def run(self, diff: str, notes: str = "") -> CommitOutcome:
		"""
		Run the flow for ``diff``.

		Declining or cancelling the commit prompt ends the run as cancelled. After a
		commit, declining or cancelling the push prompt still counts as success.

		Args:
		    diff: Diff text of the staged changes
		    notes: Optional author notes for the generator

		Returns:
		    The terminal outcome

		"""
		with loading_spinner("Generating the commit message..."):
			result = self.generator.generate(diff, notes)

		if isinstance(result, GenerationError):
			error_text = describe_generation_error(result)
			self.ui.show_error(error_text)
			return CommitOutcome.failed(CommitStatus.GENERATION_FAILED, error_text)

		message = result
		self.ui.show_success("Commit message generated")
		self.ui.show_commit_message(message)

		if not self.ui.confirm("Confirm the commit message"):
			self.ui.show_cancelled()
			return CommitOutcome.failed(CommitStatus.CANCELLED)

		try:
			commit_output = git.commit(message, bypass_hooks=self.bypass_hooks, cwd=self.repo_root)
		except GitError as e:
			logger.debug("Commit failed", exc_info=True)
			self.ui.show_error(str(e))
			return CommitOutcome.failed(CommitStatus.GIT_FAILED, str(e))

		self.ui.show_success("Successfully committed")
		if commit_output:
			self.ui.show_message(commit_output)

		# No distinction between declining and cancelling the push
		if not self.ui.confirm("Do you want to run `git push`?"):
			return CommitOutcome.committed()

		try:
			with loading_spinner("Running `git push`..."):
				push_output = git.push(self.repo_root)
		except GitError as e:
			logger.debug("Push failed", exc_info=True)
			self.ui.show_error(str(e))
			return CommitOutcome.failed(CommitStatus.GIT_FAILED, str(e))

		self.ui.show_success("Successfully pushed all commits")
		if push_output:
			self.ui.show_message(push_output)
		return CommitOutcome.committed(pushed=True)
