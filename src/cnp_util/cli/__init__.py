"""Command-line interface for the CNP Utility."""
