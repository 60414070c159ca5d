"""
issue_portal.clients

Clients for this service's own HTTP API.
"""

# Package marker.
