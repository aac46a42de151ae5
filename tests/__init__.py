"""Test package for diffscribe."""
