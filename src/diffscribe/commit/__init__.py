"""Commit message generation and the interactive commit workflow."""

from .command import CommitCommand
from .flow import ConfirmationFlow
from .generator import CommitMessageGenerator, GenerationError, describe_generation_error
from .interactive import CommitUI
from .outcome import CommitOutcome, CommitStatus
from .resolver import ChangeSetResolver

__all__ = [
	"ChangeSetResolver",
	"CommitCommand",
	"CommitMessageGenerator",
	"CommitOutcome",
	"CommitStatus",
	"CommitUI",
	"ConfirmationFlow",
	"GenerationError",
	"describe_generation_error",
]
