"""
Configuration loader for diffscribe.

Settings come in two layers. A user file holds what is shared across
repositories (model, API base), and a ``.diffscribe.yml`` at the repository
root overrides it per project. Each section is merged key by key, so a repo
file that only sets ``commit.ask_for_notes`` keeps the user's ``llm`` block.

"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from xdg.BaseDirectory import xdg_config_home

from diffscribe.config.config_schema import AppConfigSchema

logger = logging.getLogger(__name__)

REPO_CONFIG_NAME = ".diffscribe.yml"
CONFIG_ENV_VAR = "DIFFSCRIBE_CONFIG"


class ConfigError(Exception):
	"""Exception raised for configuration errors."""


class ConfigParsingError(ConfigError):
	"""Exception raised when configuration file cannot be parsed."""


def user_config_file() -> Path | None:
	"""
	Find the per-user configuration file.

	``$XDG_CONFIG_HOME/diffscribe/config.yml`` wins over the older
	``~/.diffscribe/config.yml``.

	Returns:
	    The first existing candidate, or None

	"""
	for candidate in (
		Path(xdg_config_home) / "diffscribe" / "config.yml",
		Path.home() / ".diffscribe" / "config.yml",
	):
		if candidate.is_file():
			return candidate
	return None


def merge_layers(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
	"""Merge ``override`` into ``base``; nested mappings merge, anything else replaces."""
	merged = dict(base)
	for key, value in override.items():
		if isinstance(value, dict) and isinstance(merged.get(key), dict):
			merged[key] = merge_layers(merged[key], value)
		else:
			merged[key] = value
	return merged


class ConfigLoader:
	"""
	Loads the layered diffscribe configuration into ``AppConfigSchema``.

	An explicit file (argument or ``DIFFSCRIBE_CONFIG``) is used on its own.
	Otherwise the user file is read first and the repository file on top.

	"""

	_instance: ConfigLoader | None = None

	@classmethod
	def get_instance(cls, config_file: Path | None = None, repo_root: Path | None = None) -> ConfigLoader:
		"""
		Get the shared loader, creating it on first use.

		Args:
			config_file: Explicit configuration file (optional)
			repo_root: Repository root holding ``.diffscribe.yml`` (optional)

		Returns:
			ConfigLoader: Singleton instance

		"""
		if cls._instance is None:
			cls._instance = cls(config_file, repo_root=repo_root)
		return cls._instance

	@classmethod
	def reset_instance(cls) -> None:
		"""Drop the cached singleton."""
		cls._instance = None

	def __init__(self, config_file: Path | None = None, repo_root: Path | None = None) -> None:
		"""
		Load the configuration.

		Args:
			config_file: Explicit configuration file (optional)
			repo_root: Repository root; the current directory when omitted

		Raises:
			ConfigParsingError: If a file cannot be read, parsed or validated

		"""
		self.repo_root = repo_root
		self._sources = self._config_layers(config_file)
		self._app_config = self._load_config()

	def _config_layers(self, config_file: Path | None) -> list[Path]:
		"""List the files to merge, lowest precedence first."""
		if config_file is None and os.environ.get(CONFIG_ENV_VAR):
			config_file = Path(os.environ[CONFIG_ENV_VAR])
			logger.debug("Using %s from %s", config_file, CONFIG_ENV_VAR)

		if config_file is not None:
			path = config_file.expanduser().resolve()
			if not path.is_file():
				logger.warning("Specified config file not found: %s", path)
				return []
			return [path]

		layers = []
		user_file = user_config_file()
		if user_file is not None:
			layers.append(user_file)
		repo_file = (self.repo_root or Path()) / REPO_CONFIG_NAME
		if repo_file.is_file():
			layers.append(repo_file)
		return layers

	@staticmethod
	def _parse_yaml_file(file_path: Path) -> dict[str, Any]:
		"""
		Parse a YAML file into a dictionary.

		Raises:
			yaml.YAMLError: If the file cannot be parsed as a YAML mapping
		"""
		with file_path.open(encoding="utf-8") as f:
			content = yaml.safe_load(f)
		if content is None:
			return {}
		if not isinstance(content, dict):
			msg = f"File {file_path} does not contain a valid YAML dictionary"
			raise yaml.YAMLError(msg)
		return content

	def _load_config(self) -> AppConfigSchema:
		"""
		Merge every layer and validate the result.

		Raises:
			ConfigParsingError: If a layer cannot be read or the merged settings are invalid

		"""
		merged: dict[str, Any] = {}
		for path in self._sources:
			try:
				layer = self._parse_yaml_file(path)
			except yaml.YAMLError as e:
				msg = f"Configuration file {path} does not contain a valid YAML dictionary."
				raise ConfigParsingError(msg) from e
			except OSError as e:
				msg = f"Error accessing configuration file {path}: {e}"
				raise ConfigParsingError(msg) from e
			merged = merge_layers(merged, layer)
			logger.debug("Loaded configuration layer %s", path)

		if not self._sources:
			logger.debug("No configuration file found. Using default configuration.")

		try:
			return AppConfigSchema(**merged)
		except ValidationError as e:
			sources = ", ".join(str(p) for p in self._sources) or "defaults"
			msg = f"Error parsing configuration into schema ({sources}): {e}"
			raise ConfigParsingError(msg) from e

	@property
	def sources(self) -> list[Path]:
		"""Files that were merged, lowest precedence first."""
		return list(self._sources)

	@property
	def get(self) -> AppConfigSchema:
		"""
		Get the current application configuration.

		Returns:
			AppConfigSchema: The current configuration
		"""
		return self._app_config
