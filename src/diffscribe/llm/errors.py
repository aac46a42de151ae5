"""Exceptions raised by the LLM layer."""


class LLMError(Exception):
	"""Custom exception for LLM-related errors."""


class ContextLimitError(LLMError):
	"""The request does not fit in the model's context window."""
