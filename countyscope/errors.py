"""
Error types raised by the orchestration layer.
"""

from typing import Optional


class ApiError(RuntimeError):
    """
    Raised when a ZIP query cannot be satisfied.

    `code` is a short machine-readable tag the HTTP layer uses to pick a
    status code: 'invalid_zip', 'county_not_found' or 'upstream'.
    """

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class HudLookupError(RuntimeError):
    """HUD crosswalk lookup failed (HTTP error, no match, bad geoid)."""
    pass
