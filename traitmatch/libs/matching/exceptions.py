"""
Custom exceptions for the matching module.

Only contract violations on a match call surface as errors. Data quality gaps
in the catalog (dangling company ids, no shared traits, low scores) never do.
"""


class MatchEngineError(Exception):
    """Base exception for matching errors."""
    pass


class InvalidMatchInputError(MatchEngineError):
    """Exception raised when a match call receives structurally invalid input."""
    pass


class CatalogUnavailableError(MatchEngineError):
    """Exception raised when the job/company snapshot cannot be loaded."""
    pass
