"""Shared utilities for diffscribe."""
