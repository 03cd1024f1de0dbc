# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# ============================================================================
"""
Configuration Module

Provides centralized configuration, defaults and startup validation
for the Webchat API.
"""

from core.config.defaults import (
    AppDefaults,
    DatabaseDefaults,
    CacheDefaults,
    HealthDefaults,
    Defaults,
    get_defaults,
    reset_defaults,
)
from core.config.validation import (
    EnvRule,
    EnvironmentValidationError,
    validate_environment,
    get_env,
    get_env_number,
    get_env_int,
    get_env_bool,
)

__all__ = [
    "AppDefaults",
    "DatabaseDefaults",
    "CacheDefaults",
    "HealthDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
    "EnvRule",
    "EnvironmentValidationError",
    "validate_environment",
    "get_env",
    "get_env_number",
    "get_env_int",
    "get_env_bool",
]
