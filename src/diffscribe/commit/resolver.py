"""Decide which files go into the commit."""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import TYPE_CHECKING

from diffscribe.git import GitError, get_changed_files, get_staged_files, stage_files
from diffscribe.utils.cli_utils import loading_spinner

from .outcome import CommitOutcome, CommitStatus

if TYPE_CHECKING:
	from pathlib import Path

	from .interactive import CommitUI

logger = logging.getLogger(__name__)

NO_CHANGES_MESSAGE = "No changes detected, write some code and run `diffscribe commit` again"


class ResolveStep(Enum):
	"""States of the staging resolution."""

	DETECT = auto()
	STAGE_ALL = auto()
	OFFER_STAGE_ALL = auto()
	SELECT_FILES = auto()
	STAGE_SELECTION = auto()


# detect -> (stage all | offer stage all -> select files) -> stage -> done
MAX_STEPS = len(ResolveStep)


class ChangeSetResolver:
	"""
	Resolve the set of staged files for the commit.

	When nothing is staged the user is offered to stage everything, or to pick
	files by hand. Each path through the states stages at most once, so the
	resolver always terminates with either the staged files or a failed
	CommitOutcome.

	"""

	def __init__(self, ui: CommitUI, repo_root: Path | None = None) -> None:
		"""
		Initialize the resolver.

		Args:
		    ui: Interactive UI used for prompts and messages
		    repo_root: Repository root; git runs there so every path is root-relative

		"""
		self.ui = ui
		self.repo_root = repo_root

	def resolve(self, stage_all: bool = False) -> list[str] | CommitOutcome:
		"""
		Resolve the staged file set.

		Args:
		    stage_all: Stage every changed file before resolving

		Returns:
		    Non-empty list of staged files, or the outcome that ends the run

		"""
		try:
			return self._run(stage_all)
		except GitError as e:
			logger.debug("Git failed while resolving staged files", exc_info=True)
			self.ui.show_error(str(e))
			return CommitOutcome.failed(CommitStatus.GIT_FAILED, str(e))

	def _run(self, stage_all: bool) -> list[str] | CommitOutcome:
		step = ResolveStep.STAGE_ALL if stage_all else ResolveStep.DETECT
		changed: list[str] = []
		selection: list[str] = []

		for _ in range(MAX_STEPS):
			logger.debug("Resolver step: %s", step.name)

			if step is ResolveStep.STAGE_ALL:
				changed = get_changed_files(self.repo_root)
				if not changed:
					return self._no_changes()
				return self._stage_and_collect(changed)

			elif step is ResolveStep.DETECT:
				with loading_spinner("Counting staged files..."):
					staged = get_staged_files(self.repo_root)
					changed = get_changed_files(self.repo_root)
				if staged:
					return staged
				if not changed:
					return self._no_changes()
				self.ui.show_message("No files are staged")
				step = ResolveStep.OFFER_STAGE_ALL

			elif step is ResolveStep.OFFER_STAGE_ALL:
				answer = self.ui.confirm("Do you want to stage all files and generate commit message?")
				if answer is None:
					return self._cancelled()
				if answer:
					return self._stage_and_collect(changed)
				step = ResolveStep.SELECT_FILES

			elif step is ResolveStep.SELECT_FILES:
				picked = self.ui.select_files(changed)
				if picked is None:
					return self._cancelled()
				if not picked:
					self.ui.show_error("No files selected")
					return CommitOutcome.failed(CommitStatus.NOTHING_STAGED, "No files selected")
				selection = picked
				step = ResolveStep.STAGE_SELECTION

			elif step is ResolveStep.STAGE_SELECTION:
				return self._stage_and_collect(selection)

		# Unreachable with the transitions above
		msg = "Staging resolution did not converge"
		raise RuntimeError(msg)

	def _stage_and_collect(self, files: list[str]) -> list[str] | CommitOutcome:
		with loading_spinner(f"Staging {len(files)} file(s)..."):
			stage_files(files, cwd=self.repo_root)
			staged = get_staged_files(self.repo_root)
		if not staged:
			self.ui.show_error("Nothing is staged after staging the selected files")
			return CommitOutcome.failed(CommitStatus.NOTHING_STAGED, "Staging produced no staged files")
		logger.info("Staged %d file(s)", len(staged))
		return staged

	def _no_changes(self) -> CommitOutcome:
		self.ui.show_error(NO_CHANGES_MESSAGE)
		return CommitOutcome.failed(CommitStatus.NO_CHANGES, NO_CHANGES_MESSAGE)

	def _cancelled(self) -> CommitOutcome:
		self.ui.show_cancelled()
		return CommitOutcome.failed(CommitStatus.CANCELLED)
