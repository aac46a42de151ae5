"""LLM access for diffscribe."""

from .client import LLMClient, MessageDict
from .errors import ContextLimitError, LLMError
from .prompts import build_messages

__all__ = ["ContextLimitError", "LLMClient", "LLMError", "MessageDict", "build_messages"]
