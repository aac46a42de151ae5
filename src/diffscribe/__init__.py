"""diffscribe - AI-generated commit messages for your staged changes."""

__version__ = "0.3.0"
