"""
issue_portal.platform_clients

Client boundary for the hosted auth/data/storage platform.

Responsibilities:
- Wrap the platform's auth, admin, REST and storage HTTP APIs behind small async clients.
- Keep caller credentials and the elevated service credential apart.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services and routers depend on these clients, never on raw HTTP calls.
