"""Custom exception classes for the CNP Utility.

All exceptions inherit from CNPUtilError to allow catching all custom exceptions.

The CNP engine itself never raises for end-user input: malformed identifiers
are reported as data (see cnp_util.models.cnp). These exceptions cover the
surrounding tooling - files that cannot be read and invalid configuration.
"""


class CNPUtilError(Exception):
    """Base exception for all CNP Utility custom exceptions."""

    pass


class ValidationError(CNPUtilError):
    """Raised when an input file cannot be validated at all.

    Examples:
        - CSV file is not valid UTF-8 / CSV
        - CNP column missing from the CSV header
        - Empty CSV file
    """

    pass


class ConfigurationError(CNPUtilError):
    """Raised when configuration loading or validation fails.

    Examples:
        - Invalid configuration file format
        - Unknown validation mode or century policy
        - Invalid log level
    """

    pass
