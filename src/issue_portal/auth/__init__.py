"""
issue_portal.auth

Authentication/authorization package.

Responsibilities:
- FastAPI dependencies that turn a bearer token into a verified admin `Caller`.
- An explicit session tracker for console clients.
"""

# Package marker.
