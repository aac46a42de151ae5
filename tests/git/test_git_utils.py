"""Tests for the Git utilities."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from diffscribe.git.utils import (
	GitError,
	NotAGitRepoError,
	assert_git_repo,
	commit,
	get_changed_files,
	get_diff,
	get_staged_files,
	is_excluded,
	push,
	run_git_command,
	stage_files,
)


@pytest.mark.unit
@pytest.mark.git
class TestRunGitCommand:
	"""Test the subprocess wrapper."""

	def test_returns_stdout(self) -> None:
		"""Test successful command output is returned."""
		completed = Mock(stdout="output\n")
		with patch("diffscribe.git.utils.subprocess.run", return_value=completed) as mock_run:
			assert run_git_command(["git", "status"]) == "output\n"

		mock_run.assert_called_once_with(["git", "status"], cwd=None, capture_output=True, text=True, check=True)

	def test_failure_raises_git_error(self) -> None:
		"""Test a failing command raises GitError carrying stderr."""
		error = subprocess.CalledProcessError(128, ["git", "push"], stderr="fatal: no upstream\n")
		with (
			patch("diffscribe.git.utils.subprocess.run", side_effect=error),
			pytest.raises(GitError, match="no upstream"),
		):
			run_git_command(["git", "push"])

	def test_missing_git_binary(self) -> None:
		"""Test a missing git executable is reported as GitError."""
		with (
			patch("diffscribe.git.utils.subprocess.run", side_effect=FileNotFoundError("git")),
			pytest.raises(GitError, match="not found"),
		):
			run_git_command(["git", "status"])


@pytest.mark.unit
@pytest.mark.git
class TestRepoAssertion:
	"""Test repository detection."""

	def test_inside_repo(self) -> None:
		"""Test the repo root is returned."""
		with patch("diffscribe.git.utils.run_git_command", return_value="/repo\n"):
			assert assert_git_repo() == Path("/repo")

	def test_outside_repo(self) -> None:
		"""Test NotAGitRepoError outside a work tree."""
		with (
			patch("diffscribe.git.utils.run_git_command", side_effect=GitError("fatal: not a git repository")),
			pytest.raises(NotAGitRepoError),
		):
			assert_git_repo()

	def test_not_a_repo_is_git_error(self) -> None:
		"""Test callers catching GitError also catch NotAGitRepoError."""
		assert issubclass(NotAGitRepoError, GitError)


@pytest.mark.unit
@pytest.mark.git
class TestFileListing:
	"""Test listing staged and changed files."""

	def test_get_staged_files(self) -> None:
		"""Test staged files come from the cached name-only diff."""
		with patch("diffscribe.git.utils.run_git_command", return_value="a.ts\nsrc/b.py\n") as mock_run:
			assert get_staged_files() == ["a.ts", "src/b.py"]
		mock_run.assert_called_once_with(["git", "diff", "--name-only", "--cached"], cwd=None)

	def test_get_staged_files_empty(self) -> None:
		"""Test no output means no staged files."""
		with patch("diffscribe.git.utils.run_git_command", return_value=""):
			assert get_staged_files() == []

	def test_get_changed_files_merges_untracked(self) -> None:
		"""Test modified files come first, then untracked, without duplicates."""

		def fake_git(command: list[str], cwd: Path | None = None) -> str:
			if command[:2] == ["git", "diff"]:
				return "b.py\na.ts\n"
			return "new.md\na.ts\n"

		with patch("diffscribe.git.utils.run_git_command", side_effect=fake_git):
			assert get_changed_files() == ["b.py", "a.ts", "new.md"]

	def test_listing_runs_at_given_root(self) -> None:
		"""Test both listings run in the given directory so paths share one base."""
		with patch("diffscribe.git.utils.run_git_command", return_value="") as mock_run:
			get_changed_files(Path("/repo"))
			get_staged_files(Path("/repo"))

		assert [c.kwargs["cwd"] for c in mock_run.call_args_list] == [Path("/repo")] * 3

	def test_get_changed_files_failure(self) -> None:
		"""Test listing errors propagate as GitError."""
		with (
			patch("diffscribe.git.utils.run_git_command", side_effect=GitError("boom")),
			pytest.raises(GitError, match="Failed to get changed files"),
		):
			get_changed_files()


@pytest.mark.unit
@pytest.mark.git
class TestStagingAndDiff:
	"""Test staging and diff computation."""

	def test_stage_files(self) -> None:
		"""Test files are passed after a -- separator."""
		with patch("diffscribe.git.utils.run_git_command") as mock_run:
			stage_files(["a.ts", "-weird.txt"])
		mock_run.assert_called_once_with(["git", "add", "--", "a.ts", "-weird.txt"], cwd=None)

	def test_stage_no_files(self) -> None:
		"""Test staging nothing runs no command."""
		with patch("diffscribe.git.utils.run_git_command") as mock_run:
			stage_files([])
		mock_run.assert_not_called()

	def test_stage_failure(self) -> None:
		"""Test staging errors are wrapped."""
		with (
			patch("diffscribe.git.utils.run_git_command", side_effect=GitError("pathspec did not match")),
			pytest.raises(GitError, match="Failed to stage files"),
		):
			stage_files(["missing.txt"])

	def test_get_diff_limits_to_files(self) -> None:
		"""Test the diff covers exactly the given files."""
		with patch("diffscribe.git.utils.run_git_command", return_value="+line") as mock_run:
			assert get_diff(["a.ts", "b.ts"]) == "+line"
		mock_run.assert_called_once_with(["git", "diff", "--staged", "--", "a.ts", "b.ts"], cwd=None)

	def test_get_diff_skips_excluded(self) -> None:
		"""Test lock files are left out of the diff."""
		with patch("diffscribe.git.utils.run_git_command", return_value="+line") as mock_run:
			get_diff(["a.ts", "web/package-lock.json"], exclude=["package-lock.json"])
		mock_run.assert_called_once_with(["git", "diff", "--staged", "--", "a.ts"], cwd=None)

	def test_get_diff_all_excluded(self) -> None:
		"""Test an empty diff when every file is excluded."""
		with patch("diffscribe.git.utils.run_git_command") as mock_run:
			assert get_diff(["uv.lock"], exclude=["*.lock"]) == ""
		mock_run.assert_not_called()

	@pytest.mark.parametrize(
		("path", "expected"),
		[
			("yarn.lock", True),
			("frontend/yarn.lock", True),
			("src/lock.py", False),
		],
	)
	def test_is_excluded(self, path: str, expected: bool) -> None:
		"""Test basename and glob matching."""
		assert is_excluded(path, ["yarn.lock", "*.lock"]) is expected


@pytest.mark.unit
@pytest.mark.git
class TestCommitAndPush:
	"""Test the commit and push wrappers."""

	def test_commit_passes_message_verbatim(self) -> None:
		"""Test the message is a single literal argument."""
		message = 'feat: add "quotes" and $VARS\n\nbody line'
		with patch("diffscribe.git.utils.run_git_command", return_value="[main abc123] feat\n") as mock_run:
			output = commit(message)
		mock_run.assert_called_once_with(["git", "commit", "-m", message], cwd=None)
		assert output == "[main abc123] feat"

	def test_commit_bypass_hooks(self) -> None:
		"""Test --no-verify is appended when bypassing hooks."""
		with patch("diffscribe.git.utils.run_git_command", return_value="") as mock_run:
			commit("fix: x", bypass_hooks=True)
		mock_run.assert_called_once_with(["git", "commit", "-m", "fix: x", "--no-verify"], cwd=None)

	def test_commit_failure(self) -> None:
		"""Test commit failures propagate."""
		with (
			patch("diffscribe.git.utils.run_git_command", side_effect=GitError("hook failed")),
			pytest.raises(GitError, match="hook failed"),
		):
			commit("fix: x")

	def test_commit_and_push_at_root(self) -> None:
		"""Test commit and push run in the given directory."""
		with patch("diffscribe.git.utils.run_git_command", return_value="") as mock_run:
			commit("fix: x", cwd=Path("/repo"))
			push(Path("/repo"))

		assert [c.kwargs["cwd"] for c in mock_run.call_args_list] == [Path("/repo"), Path("/repo")]

	def test_push(self) -> None:
		"""Test push returns its stripped output."""
		with patch("diffscribe.git.utils.run_git_command", return_value="Everything up-to-date\n") as mock_run:
			assert push() == "Everything up-to-date"
		mock_run.assert_called_once_with(["git", "push"], cwd=None)
