"""Generator module for commit messages."""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import TYPE_CHECKING, assert_never

from diffscribe.llm import ContextLimitError, LLMError, build_messages

if TYPE_CHECKING:
	from diffscribe.config import LLMSchema
	from diffscribe.llm import LLMClient, MessageDict

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^```[\w-]*\n(?P<body>.*?)\n?```$", re.DOTALL)


class GenerationError(Enum):
	"""Reasons a single generation attempt produced no message."""

	EMPTY_MESSAGE = "empty_message"
	INTERNAL_ERROR = "internal_error"
	TOO_MUCH_TOKENS = "too_much_tokens"


def describe_generation_error(error: GenerationError) -> str:
	"""Return the user-facing text for ``error``."""
	match error:
		case GenerationError.EMPTY_MESSAGE:
			return "empty AI response, try again"
		case GenerationError.INTERNAL_ERROR:
			return "internal error, try again"
		case GenerationError.TOO_MUCH_TOKENS:
			return "too much content in diff; stage and commit in smaller parts"
		case _:
			assert_never(error)


def clean_message(content: str) -> str:
	"""
	Normalize raw model output into a commit message.

	Strips surrounding whitespace and a wrapping code fence, and collapses
	runs of blank lines.

	"""
	cleaned = content.strip()
	fenced = _FENCE_RE.match(cleaned)
	if fenced:
		cleaned = fenced.group("body").strip()
	return re.sub(r"\n{3,}", "\n\n", cleaned)


class CommitMessageGenerator:
	"""Generates commit messages using LLMs."""

	def __init__(self, llm_client: LLMClient, config: LLMSchema) -> None:
		"""
		Initialize the commit message generator.

		Args:
		    llm_client: LLMClient instance to use
		    config: The ``llm`` section of the application config

		"""
		self.client = llm_client
		self.config = config

	def _exceeds_token_limit(self, messages: list[MessageDict]) -> bool:
		try:
			token_count = self.client.count_tokens(messages)
		except Exception:  # noqa: BLE001
			# Unknown tokenizer; let the provider enforce its own limit
			logger.debug("Could not count prompt tokens", exc_info=True)
			return False
		logger.debug("Prompt size: %d tokens (limit %d)", token_count, self.config.max_input_tokens)
		return token_count > self.config.max_input_tokens

	def generate(self, diff: str, notes: str = "") -> str | GenerationError:
		"""
		Make one attempt at a commit message for ``diff``.

		Args:
		    diff: Diff text of the staged changes
		    notes: Optional author notes appended to the request

		Returns:
		    The commit message, or the GenerationError describing why none was produced

		"""
		messages = build_messages(diff, notes)

		if self._exceeds_token_limit(messages):
			logger.warning("Diff too large for a single request")
			return GenerationError.TOO_MUCH_TOKENS

		try:
			content = self.client.completion(messages)
		except ContextLimitError:
			return GenerationError.TOO_MUCH_TOKENS
		except LLMError:
			logger.exception("Commit message generation failed")
			return GenerationError.INTERNAL_ERROR

		message = clean_message(content)
		if not message:
			logger.warning("LLM returned an empty commit message")
			return GenerationError.EMPTY_MESSAGE
		return message
