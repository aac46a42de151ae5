"""Pydantic schemas for the diffscribe configuration file."""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_DIFF_EXCLUDE = [
	"package-lock.json",
	"yarn.lock",
	"pnpm-lock.yaml",
	"poetry.lock",
	"uv.lock",
	"Cargo.lock",
]


class LLMSchema(BaseModel):
	"""Settings for the completion backend."""

	# litellm "provider/model" identifier
	model: str = "openai/gpt-4o-mini"
	api_base: str | None = None
	temperature: float = Field(default=0.3, ge=0.0, le=2.0)
	max_output_tokens: int = Field(default=500, gt=0)
	# Prompts larger than this are rejected before any request is made
	max_input_tokens: int = Field(default=4096, gt=0)
	timeout: float = Field(default=30.0, gt=0)


class CommitSchema(BaseModel):
	"""Settings for the commit workflow."""

	ask_for_notes: bool = True
	bypass_hooks: bool = False
	diff_exclude: list[str] = Field(default_factory=lambda: list(DEFAULT_DIFF_EXCLUDE))


class AppConfigSchema(BaseModel):
	"""Top-level configuration."""

	llm: LLMSchema = Field(default_factory=LLMSchema)
	commit: CommitSchema = Field(default_factory=CommitSchema)
