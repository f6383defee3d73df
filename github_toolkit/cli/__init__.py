"""Command-line interface for the GitHub toolkit."""
