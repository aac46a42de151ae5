"""Global test fixtures and configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock

import pytest

from diffscribe.commit.interactive import CommitUI
from diffscribe.config import AppConfigSchema, ConfigLoader
from diffscribe.llm import LLMClient

if TYPE_CHECKING:
	from collections.abc import Iterator

SAMPLE_DIFF = """\
diff --git a/a.ts b/a.ts
index 1234567..abcdef0 100644
--- a/a.ts
+++ b/a.ts
@@ -1,2 +1,3 @@
 const a = 1;
+const b = 2;
"""


@pytest.fixture(autouse=True)
def reset_config_singleton() -> Iterator[None]:
	"""Make sure no test sees a ConfigLoader cached by another."""
	ConfigLoader.reset_instance()
	yield
	ConfigLoader.reset_instance()


@pytest.fixture
def app_config() -> AppConfigSchema:
	"""Default configuration."""
	return AppConfigSchema()


@pytest.fixture
def mock_ui() -> Mock:
	"""A CommitUI whose prompts must be scripted by the test."""
	ui = Mock(spec=CommitUI)
	ui.confirm.return_value = True
	return ui


@pytest.fixture
def mock_llm_client() -> Mock:
	"""An LLMClient returning a fixed message well under the token limit."""
	client = Mock(spec=LLMClient)
	client.count_tokens.return_value = 100
	client.completion.return_value = "fix: add line"
	return client
