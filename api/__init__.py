# ============================================================================
# API MODULE
# ============================================================================
# STATUS: Core - HTTP plumbing
# PURPOSE: Middleware shared by all Webchat API routes
# ============================================================================
"""
API Module

HTTP middleware for the Webchat API.
"""

from .middleware import SecurityHeadersMiddleware, RequestContextMiddleware

__all__ = [
    "SecurityHeadersMiddleware",
    "RequestContextMiddleware",
]
