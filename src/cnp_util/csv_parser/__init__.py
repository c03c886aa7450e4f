"""CSV import and bulk CNP validation."""
