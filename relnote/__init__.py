"""Relnote - categorized release notes from commit history."""

__version__ = "0.3.0"
