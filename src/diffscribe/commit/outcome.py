"""Terminal outcomes of a commit run."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class CommitStatus(Enum):
	"""How a commit run ended."""

	COMMITTED = auto()
	NOT_A_REPO = auto()
	NO_CHANGES = auto()
	NOTHING_STAGED = auto()
	GENERATION_FAILED = auto()
	GIT_FAILED = auto()
	CANCELLED = auto()


@dataclass(frozen=True)
class CommitOutcome:
	"""Result returned up the workflow; only the CLI turns it into an exit code."""

	status: CommitStatus
	detail: str | None = None
	pushed: bool = False

	@property
	def is_success(self) -> bool:
		"""Whether a commit was created."""
		return self.status is CommitStatus.COMMITTED

	@property
	def exit_code(self) -> int:
		"""Process exit status for this outcome."""
		return 0 if self.is_success else 1

	@classmethod
	def committed(cls, *, pushed: bool = False) -> CommitOutcome:
		"""Successful run."""
		return cls(CommitStatus.COMMITTED, pushed=pushed)

	@classmethod
	def failed(cls, status: CommitStatus, detail: str | None = None) -> CommitOutcome:
		"""Any non-success terminal path."""
		if status is CommitStatus.COMMITTED:
			msg = "Use CommitOutcome.committed() for successful runs"
			raise ValueError(msg)
		return cls(status, detail)
