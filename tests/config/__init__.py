"""Tests for configuration."""
