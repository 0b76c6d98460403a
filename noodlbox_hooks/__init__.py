"""noodlbox semantic search hooks for Claude Code."""

__version__ = "0.4.0"
