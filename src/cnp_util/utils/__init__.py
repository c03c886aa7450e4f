"""Utility helpers shared across the CNP Utility."""
