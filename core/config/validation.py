# ============================================================================
# ENVIRONMENT VALIDATION
# ============================================================================
# STATUS: Core - Startup configuration checks
# PURPOSE: Fail fast on missing or malformed environment variables
# ============================================================================
"""
Environment Validation

Declarative rules for the environment variables the API reads at startup.
Missing optional variables are filled with their defaults (and reported as
warnings); missing required or malformed variables abort startup.

Usage:
    from core.config.validation import validate_environment

    validate_environment()  # raises EnvironmentValidationError
"""

import logging
import os
from dataclasses import dataclass
from typing import List, MutableMapping, Optional, Union
from urllib.parse import urlparse

logger = logging.getLogger(__name__)


class EnvironmentValidationError(RuntimeError):
    """Raised when one or more environment rules fail."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("Environment validation failed: " + "; ".join(self.errors))


@dataclass(frozen=True)
class EnvRule:
    """Validation rule for a single environment variable."""
    key: str
    required: bool = False
    type: str = "string"  # string | number | integer | boolean | url
    min_length: Optional[int] = None
    default: Optional[Union[str, int, float]] = None
    description: Optional[str] = None


ENV_RULES: List[EnvRule] = [
    # Critical - Database
    EnvRule(
        key="DATABASE_URL",
        required=True,
        description="PostgreSQL connection URL is required",
    ),

    # Secrets (validated only when present)
    EnvRule(
        key="JWT_SECRET",
        min_length=32,
        description="JWT secret must be at least 32 characters",
    ),

    # Application
    EnvRule(key="APP_ENV", default="development"),
    EnvRule(key="PORT", type="integer", default=3000),
    EnvRule(key="FRONTEND_URL", type="url", default="http://localhost:5173"),
    EnvRule(key="LOG_LEVEL", default="INFO"),

    # Cache
    EnvRule(key="REDIS_URL", type="url", default="redis://localhost:6379/0"),
    EnvRule(key="CACHE_TTL", type="integer", default=3600),

    # Database Pool
    EnvRule(key="DB_MIN_POOL_SIZE", type="integer", default=2),
    EnvRule(key="DB_MAX_POOL_SIZE", type="integer", default=10),

    # Health
    EnvRule(key="HEALTH_PROBE_TIMEOUT", type="number", default=5),
]


def _is_number(value: str) -> bool:
    try:
        float(value)
    except ValueError:
        return False
    return True


def _is_integer(value: str) -> bool:
    try:
        int(value)
    except ValueError:
        return False
    return True


def _looks_like_url(value: str) -> bool:
    parsed = urlparse(value)
    return bool(parsed.scheme and parsed.netloc)


def validate_environment(
    environ: Optional[MutableMapping[str, str]] = None,
    rules: Optional[List[EnvRule]] = None,
) -> List[str]:
    """
    Validate environment variables against rules.

    Defaults are written back into ``environ`` so later readers see them.

    Args:
        environ: Mapping to validate (defaults to os.environ)
        rules: Rules to apply (defaults to ENV_RULES)

    Returns:
        Warning messages

    Raises:
        EnvironmentValidationError: If any rule fails
    """
    environ = os.environ if environ is None else environ
    rules = ENV_RULES if rules is None else rules

    errors: List[str] = []
    warnings: List[str] = []

    for rule in rules:
        value = environ.get(rule.key)

        if rule.required and not value:
            suffix = f": {rule.description}" if rule.description else ""
            errors.append(f"{rule.key} is required{suffix}")
            continue

        if not value and rule.default is not None:
            environ[rule.key] = str(rule.default)
            warnings.append(f"{rule.key} not set, using default: {rule.default}")
            continue

        if not value:
            continue

        if rule.type == "number" and not _is_number(value):
            errors.append(f"{rule.key} must be a valid number, got: {value}")

        elif rule.type == "integer" and not _is_integer(value):
            errors.append(f"{rule.key} must be a whole number, got: {value}")

        elif rule.type == "boolean" and value.lower() not in ("true", "false"):
            errors.append(f"{rule.key} must be true or false, got: {value}")

        elif rule.type == "url" and not _looks_like_url(value):
            warnings.append(f"{rule.key} might not be a valid URL: {value}")

        if rule.min_length and len(value) < rule.min_length:
            errors.append(
                f"{rule.key} must be at least {rule.min_length} characters, got {len(value)}"
            )

    if warnings:
        logger.warning("Environment warnings:")
        for warning in warnings:
            logger.warning(f"   - {warning}")

    if errors:
        logger.error("Environment validation failed:")
        for error in errors:
            logger.error(f"   - {error}")
        raise EnvironmentValidationError(errors)

    logger.info("Environment validation passed")
    return warnings


# ============================================================================
# TYPED ACCESSORS
# ============================================================================

def get_env(key: str, default: Optional[str] = None) -> str:
    """Get a string variable, raising if neither value nor default exists."""
    value = os.environ.get(key) or default
    if not value:
        raise EnvironmentValidationError([f"Environment variable {key} is not set"])
    return value


def get_env_number(key: str, default: Optional[float] = None) -> float:
    """Get a numeric variable."""
    value = os.environ.get(key)
    if not value:
        if default is not None:
            return default
        raise EnvironmentValidationError([f"Environment variable {key} is not set"])

    if not _is_number(value):
        raise EnvironmentValidationError(
            [f"Environment variable {key} must be a number, got: {value}"]
        )
    return float(value)


def get_env_int(key: str, default: Optional[int] = None) -> int:
    """Get a whole-number variable."""
    value = os.environ.get(key)
    if not value:
        if default is not None:
            return default
        raise EnvironmentValidationError([f"Environment variable {key} is not set"])

    if not _is_integer(value):
        raise EnvironmentValidationError(
            [f"Environment variable {key} must be a whole number, got: {value}"]
        )
    return int(value)


def get_env_bool(key: str, default: Optional[bool] = None) -> bool:
    """Get a boolean variable ("true" is True, anything else False)."""
    value = os.environ.get(key)
    if not value:
        if default is not None:
            return default
        raise EnvironmentValidationError([f"Environment variable {key} is not set"])
    return value.lower() == "true"


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "EnvRule",
    "ENV_RULES",
    "EnvironmentValidationError",
    "validate_environment",
    "get_env",
    "get_env_number",
    "get_env_int",
    "get_env_bool",
]
