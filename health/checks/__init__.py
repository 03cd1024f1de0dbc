# ============================================================================
# HEALTH CHECK PLUGINS
# ============================================================================
# STATUS: Infrastructure - Health check implementations
# PURPOSE: Probes for the Webchat API dependencies
# ============================================================================
"""
Health Check Plugins

Concrete probes, each constructed with the collaborator it checks:

- database: DatabaseCheck(DependencyPinger)
- cache: CacheCheck(CacheService)
"""

from health.checks.database import DatabaseCheck
from health.checks.cache import CacheCheck

__all__ = [
    "DatabaseCheck",
    "CacheCheck",
]
