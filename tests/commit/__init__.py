"""Tests for the commit workflow."""
