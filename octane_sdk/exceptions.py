"""
Octane SDK exceptions
"""

from typing import Any, Dict, List, Optional


class OctaneError(Exception):
    """Base exception for all Octane SDK errors"""

    pass


class OctaneAPIError(OctaneError):
    """Raised when API request fails

    Octane returns a JSON body with ``error_code`` and ``description`` on
    failure; both are kept when present.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_code: Optional[str] = None,
        description: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code
        self.description = description


class OctaneNotFoundError(OctaneAPIError):
    """Raised when resource is not found (404)"""

    def __init__(self, message: str, error_code: Optional[str] = None, description: Optional[str] = None):
        super().__init__(message, status_code=404, error_code=error_code, description=description)


class OctaneAuthenticationError(OctaneAPIError):
    """Raised when authentication fails (401)"""

    def __init__(self, message: str, status_code: int = 401):
        super().__init__(message, status_code=status_code)


class OctanePartialError(OctaneAPIError):
    """Raised when a bulk operation succeeded only for some entities

    Args:
        message: Summary message
        entities: Entities the server did accept (raw dicts)
        errors: Error objects returned for the rejected entities
    """

    def __init__(self, message: str, entities: List[Dict[str, Any]], errors: List[Dict[str, Any]]):
        super().__init__(message, status_code=409)
        self.entities = entities
        self.errors = errors
