"""
issue_portal.api.routers

HTTP routers.
"""

# Package marker.
