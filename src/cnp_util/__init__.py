"""CNP Utility - validation and demographic decoding of Romanian CNP numbers."""

__version__ = "0.1.0"
