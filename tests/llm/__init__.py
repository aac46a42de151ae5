"""Tests for LLM access."""
