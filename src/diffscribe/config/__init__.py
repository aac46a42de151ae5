"""Configuration for diffscribe."""

from .config_loader import ConfigError, ConfigLoader, ConfigParsingError
from .config_schema import AppConfigSchema, CommitSchema, LLMSchema

__all__ = [
	"AppConfigSchema",
	"CommitSchema",
	"ConfigError",
	"ConfigLoader",
	"ConfigParsingError",
	"LLMSchema",
]
