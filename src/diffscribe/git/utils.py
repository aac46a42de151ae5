"""Git utilities for diffscribe."""

from __future__ import annotations

import fnmatch
import logging
import subprocess
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

if TYPE_CHECKING:
	from collections.abc import Iterable

logger = logging.getLogger(__name__)


class GitError(Exception):
	"""Custom exception for Git-related errors."""


class NotAGitRepoError(GitError):
	"""Raised when the working directory is not inside a Git repository."""


def run_git_command(command: list[str], cwd: Path | None = None) -> str:
	"""
	Run a Git command and return its output.

	Args:
	    command: Git command to run
	    cwd: Working directory (optional)

	Returns:
	    Command output as string

	Raises:
	    GitError: If the command fails

	"""
	logger.debug("Running git command: %s", " ".join(command))
	try:
		result = subprocess.run(  # noqa: S603
			command,
			cwd=cwd,
			capture_output=True,
			text=True,
			check=True,
		)
	except subprocess.CalledProcessError as e:
		stderr = (e.stderr or "").strip()
		error_msg = f"Git command failed: {' '.join(command)}\nError: {stderr}"
		logger.debug(error_msg)
		raise GitError(error_msg) from e
	except FileNotFoundError as e:
		msg = "Git executable not found. Is git installed and on your PATH?"
		raise GitError(msg) from e
	else:
		return result.stdout


def _split_lines(output: str) -> list[str]:
	return [line.strip() for line in output.splitlines() if line.strip()]


def get_repo_root(path: Path | None = None) -> Path:
	"""
	Get the root directory of the Git repository.

	Args:
	    path: Optional path to start searching from

	Returns:
	    Path to repository root

	Raises:
	    NotAGitRepoError: If not in a Git repository

	"""
	try:
		result = run_git_command(["git", "rev-parse", "--show-toplevel"], path)
	except GitError as e:
		msg = "Not in a Git repository"
		raise NotAGitRepoError(msg) from e
	return Path(result.strip())


def assert_git_repo(path: Path | None = None) -> Path:
	"""Fail fast unless ``path`` (or the cwd) is inside a Git work tree."""
	return get_repo_root(path)


def get_staged_files(cwd: Path | None = None) -> list[str]:
	"""
	List the files currently staged for the next commit.

	Paths are relative to the repository root.

	Raises:
	    GitError: If git command fails

	"""
	try:
		return _split_lines(run_git_command(["git", "diff", "--name-only", "--cached"], cwd=cwd))
	except GitError as e:
		msg = f"Failed to get staged files: {e}"
		raise GitError(msg) from e


def get_untracked_files(cwd: Path | None = None) -> list[str]:
	"""
	Get a list of untracked files in the repository.

	These are files that are not yet tracked by Git, respecting .gitignore.
	``ls-files`` only lists paths below ``cwd``, relative to it, so pass the
	repository root to get root-relative paths for the whole tree.

	Raises:
	    GitError: If git command fails

	"""
	try:
		return _split_lines(run_git_command(["git", "ls-files", "--others", "--exclude-standard"], cwd=cwd))
	except GitError as e:
		msg = "Failed to get untracked files"
		raise GitError(msg) from e


def get_changed_files(cwd: Path | None = None) -> list[str]:
	"""
	List modified tracked files followed by untracked ones.

	Args:
	    cwd: Repository root; paths come back relative to it

	Returns:
	    File paths in listing order, without duplicates

	Raises:
	    GitError: If git command fails

	"""
	try:
		modified = _split_lines(run_git_command(["git", "diff", "--name-only"], cwd=cwd))
	except GitError as e:
		msg = f"Failed to get changed files: {e}"
		raise GitError(msg) from e

	# dict.fromkeys keeps first-seen order
	return list(dict.fromkeys([*modified, *get_untracked_files(cwd)]))


def stage_files(files: list[str], cwd: Path | None = None) -> None:
	"""
	Stage the specified files.

	Deleted tracked files are staged as well since ``git add`` records removals.

	Args:
	    files: List of files to stage, relative to ``cwd``
	    cwd: Repository root the paths are relative to

	Raises:
	    GitError: If staging fails

	"""
	if not files:
		logger.warning("No files provided to stage_files")
		return

	logger.debug("Staging %d files", len(files))
	try:
		run_git_command(["git", "add", "--", *files], cwd=cwd)
	except GitError as e:
		msg = f"Failed to stage files: {e}"
		raise GitError(msg) from e


def is_excluded(file_path: str, patterns: Iterable[str]) -> bool:
	"""Check a path's basename (and full path) against glob patterns."""
	name = PurePosixPath(file_path).name
	return any(fnmatch.fnmatch(name, pattern) or fnmatch.fnmatch(file_path, pattern) for pattern in patterns)


def get_diff(files: list[str], exclude: Iterable[str] = (), cwd: Path | None = None) -> str:
	"""
	Get the staged diff restricted to ``files``.

	Files matching any ``exclude`` pattern (lock files and the like) are left out
	of the diff text but stay staged.

	Args:
	    files: Staged files to diff
	    exclude: Glob patterns of files to leave out
	    cwd: Repository root the paths are relative to

	Returns:
	    The diff text

	Raises:
	    GitError: If git command fails

	"""
	exclude = list(exclude)
	included = [f for f in files if not is_excluded(f, exclude)]
	skipped = len(files) - len(included)
	if skipped:
		logger.info("Excluding %d file(s) from the diff: %s", skipped, [f for f in files if f not in included])
	if not included:
		return ""

	try:
		return run_git_command(["git", "diff", "--staged", "--", *included], cwd=cwd)
	except GitError as e:
		msg = f"Failed to compute diff: {e}"
		raise GitError(msg) from e


def commit(message: str, *, bypass_hooks: bool = False, cwd: Path | None = None) -> str:
	"""
	Create a commit with the given message.

	Args:
	    message: Commit message, passed verbatim as a single argument
	    bypass_hooks: Whether to add ``--no-verify``
	    cwd: Directory to run git in

	Returns:
	    Standard output of ``git commit``

	Raises:
	    GitError: If commit fails

	"""
	commit_cmd = ["git", "commit", "-m", message]
	if bypass_hooks:
		commit_cmd.append("--no-verify")

	output = run_git_command(commit_cmd, cwd=cwd)
	logger.info("Created commit with message: %s", message)
	return output.strip()


def push(cwd: Path | None = None) -> str:
	"""
	Push the current branch to its upstream.

	Args:
	    cwd: Directory to run git in

	Returns:
	    Standard output of ``git push``

	Raises:
	    GitError: If push fails

	"""
	output = run_git_command(["git", "push"], cwd=cwd)
	logger.info("Pushed commits to remote")
	return output.strip()
