"""
Custom exception classes for the bgg2md converter.

The conversion core itself never raises for string input; these are used by
the command line and HTTP layers.
"""


class Bgg2MdError(Exception):
    """Base exception for all bgg2md errors."""
    pass


class SecurityError(Bgg2MdError):
    """Error related to input validation (size limits)."""
    pass
