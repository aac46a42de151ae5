"""Git operations for diffscribe."""

from .utils import (
	GitError,
	NotAGitRepoError,
	assert_git_repo,
	commit,
	get_changed_files,
	get_diff,
	get_repo_root,
	get_staged_files,
	push,
	stage_files,
)

__all__ = [
	"GitError",
	"NotAGitRepoError",
	"assert_git_repo",
	"commit",
	"get_changed_files",
	"get_diff",
	"get_repo_root",
	"get_staged_files",
	"push",
	"stage_files",
]
