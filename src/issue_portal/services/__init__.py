"""
issue_portal.services

Service layer.

Responsibilities:
- Admin account management (the privileged action dispatcher).
- Report intake and site branding flows for the console.
"""

# Package marker.
