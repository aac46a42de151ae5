"""LLM client for the completion backend."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Literal, TypedDict

import litellm

from .errors import ContextLimitError, LLMError

if TYPE_CHECKING:
	from diffscribe.config import LLMSchema

logger = logging.getLogger(__name__)


class MessageDict(TypedDict):
	"""Typed dictionary for LLM message structure."""

	role: Literal["user", "system"]
	content: str


class LLMClient:
	"""Thin wrapper around a single litellm chat completion."""

	def __init__(self, config: LLMSchema) -> None:
		"""
		Initialize the LLM client.

		Args:
		    config: The ``llm`` section of the application config

		"""
		self.config = config

	@property
	def model(self) -> str:
		"""Model identifier used for requests."""
		return self.config.model

	def count_tokens(self, messages: list[MessageDict]) -> int:
		"""Estimate the prompt size of ``messages`` for the configured model."""
		return litellm.token_counter(model=self.model, messages=messages)

	def completion(self, messages: list[MessageDict]) -> str:
		"""
		Send ``messages`` and return the text of the first choice.

		Exactly one request is made; retries are disabled.

		Args:
		    messages: Chat messages to send

		Returns:
		    The generated text, possibly empty

		Raises:
		    ContextLimitError: If the provider rejects the request as too large
		    LLMError: If the API call fails for any other reason

		"""
		logger.debug(
			"Calling LiteLLM: Model=%s, API_Base=%s, Messages=%d",
			self.model,
			self.config.api_base or "Default",
			len(messages),
		)
		try:
			response = litellm.completion(
				model=self.model,
				messages=messages,
				api_base=self.config.api_base,
				temperature=self.config.temperature,
				max_tokens=self.config.max_output_tokens,
				timeout=self.config.timeout,
				num_retries=0,
			)
		except litellm.ContextWindowExceededError as e:
			logger.warning("Prompt exceeded the context window of %s", self.model)
			msg = f"Prompt too large for model {self.model}: {e}"
			raise ContextLimitError(msg) from e
		except Exception as e:
			logger.exception("LLM API call failed")
			msg = f"LLM API call failed: {e}"
			raise LLMError(msg) from e

		try:
			content = response.choices[0].message.content
		except (AttributeError, IndexError, TypeError) as e:
			msg = "Could not extract content from LLM response"
			logger.exception(msg)
			raise LLMError(msg) from e

		return content or ""
