"""Main commit command implementation for diffscribe."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from diffscribe.git import GitError, NotAGitRepoError, assert_git_repo, get_diff

from .flow import ConfirmationFlow
from .generator import CommitMessageGenerator
from .interactive import CommitUI
from .outcome import CommitOutcome, CommitStatus
from .resolver import ChangeSetResolver

if TYPE_CHECKING:
	from pathlib import Path

	from diffscribe.config import AppConfigSchema
	from diffscribe.llm import LLMClient

logger = logging.getLogger(__name__)


class CommitCommand:
	"""Handles the commit command workflow."""

	def __init__(
		self,
		config: AppConfigSchema,
		llm_client: LLMClient,
		ui: CommitUI | None = None,
		path: Path | None = None,
		bypass_hooks: bool = False,
	) -> None:
		"""
		Initialize the commit command.

		Args:
		    config: Application configuration
		    llm_client: Client for the completion backend
		    ui: Interactive UI; a default CommitUI is created when omitted
		    path: Directory expected to be inside the repository
		    bypass_hooks: Whether to bypass git hooks with --no-verify

		"""
		self.config = config
		self.path = path
		self.ui = ui or CommitUI()
		self.generator = CommitMessageGenerator(llm_client, config.llm)
		self.bypass_hooks = bypass_hooks or config.commit.bypass_hooks

	def _collect_notes(self, notes: str | None) -> str | None:
		"""
		Work out the notes to send with the diff.

		Returns:
		    The notes (possibly empty), or None if the user cancelled

		"""
		if notes is not None:
			return notes.strip()
		if not self.config.commit.ask_for_notes:
			return ""

		wants_notes = self.ui.confirm("Do you want to pass any notes to the AI?", default=False)
		if wants_notes is None:
			return None
		if not wants_notes:
			return ""
		return self.ui.ask_notes()

	def run(self, stage_all: bool = False, notes: str | None = None) -> CommitOutcome:
		"""
		Run the commit command workflow.

		Args:
		    stage_all: Stage every changed file before generating the message
		    notes: Notes for the AI; when None the user may be prompted for them

		Returns:
		    The terminal outcome of the run

		"""
		try:
			repo_root = assert_git_repo(self.path)
		except NotAGitRepoError as e:
			self.ui.show_error(str(e))
			return CommitOutcome.failed(CommitStatus.NOT_A_REPO, str(e))

		self.ui.show_intro("diffscribe")

		# git reports paths relative to the root, so every git call runs there
		resolved = ChangeSetResolver(self.ui, repo_root=repo_root).resolve(stage_all)
		if isinstance(resolved, CommitOutcome):
			return resolved
		staged_files = resolved

		self.ui.show_staged_files(staged_files)

		collected_notes = self._collect_notes(notes)
		if collected_notes is None:
			self.ui.show_cancelled()
			return CommitOutcome.failed(CommitStatus.CANCELLED)

		try:
			diff = get_diff(staged_files, exclude=self.config.commit.diff_exclude, cwd=repo_root)
		except GitError as e:
			logger.debug("Diff failed", exc_info=True)
			self.ui.show_error(str(e))
			return CommitOutcome.failed(CommitStatus.GIT_FAILED, str(e))

		if not diff.strip():
			message = "Staged changes only touch excluded files; nothing to describe"
			self.ui.show_error(message)
			return CommitOutcome.failed(CommitStatus.NO_CHANGES, message)

		flow = ConfirmationFlow(self.generator, self.ui, bypass_hooks=self.bypass_hooks, repo_root=repo_root)
		outcome = flow.run(diff, collected_notes)
		logger.info("Commit run finished: %s", outcome.status.name)
		return outcome
