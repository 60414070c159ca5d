"""
issue_portal.errors

Error taxonomy shared by the platform clients, services and API layer.

Responsibilities:
- Carry a user-facing message plus the HTTP status it maps to.
- Keep platform messages verbatim so callers can surface them as-is.
"""

from __future__ import annotations


class PortalError(Exception):
    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AuthenticationError(PortalError):
    """Missing or invalid bearer token."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class AuthorizationError(PortalError):
    """Valid identity that does not hold the required role."""

    status_code = 403

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message)


class ValidationError(PortalError):
    status_code = 400


class UnknownActionError(PortalError):
    status_code = 400

    def __init__(self, message: str = "Unknown action") -> None:
        super().__init__(message)


class UpstreamError(PortalError):
    """
    The platform answered a call with an error.
    `upstream_status` keeps the platform's own status for logs; the API still answers 400.
    """

    status_code = 400

    def __init__(self, message: str, *, upstream_status: int | None = None) -> None:
        super().__init__(message)
        self.upstream_status = upstream_status


# --- Module Notes -----------------------------------------------------------
# Anything that is not a PortalError is treated as unexpected and surfaces as 500
# (see `api.middleware.CorsMiddleware`).
