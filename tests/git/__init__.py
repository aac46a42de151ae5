"""Tests for git operations."""
