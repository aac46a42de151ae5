"""Prompt templates for commit message generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
	from .client import MessageDict

SYSTEM_PROMPT = """\
You are to act as the author of a commit message in git. Your mission is to create a clean and
comprehensive commit message following the Conventional Commits specification.

The commit message should be structured as follows:

```
<type>[optional scope]: <description>

[optional body]
```

Rules:
- Use the present tense and the imperative mood ("add", not "added").
- Allowed types: feat, fix, docs, style, refactor, perf, test, build, ci, chore.
- Keep the first line under 72 characters.
- Explain WHAT changed and WHY in the body only when the diff is not self-explanatory.
- Reply with the commit message only: no code fences, no preamble.
"""

NOTES_TEMPLATE = """

Additional notes from the author, take them into account:
{notes}"""


def build_messages(diff: str, notes: str = "") -> list[MessageDict]:
	"""
	Build the chat messages for a diff and optional author notes.

	Args:
	    diff: Diff text of the staged changes
	    notes: Free-text notes appended to the request when non-empty

	Returns:
	    System and user messages

	"""
	user_content = f"Here is the `git diff --staged` output:\n\n{diff}"
	if notes.strip():
		user_content += NOTES_TEMPLATE.format(notes=notes.strip())

	return [
		{"role": "system", "content": SYSTEM_PROMPT},
		{"role": "user", "content": user_content},
	]
