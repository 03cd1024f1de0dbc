# ============================================================================
# CORE MODULE
# ============================================================================
# STATUS: Core module initialization
# PURPOSE: Export configuration, logging and outcome helpers
# ============================================================================

from core.results import Outcome, attempt, error_message

__all__ = [
    "Outcome",
    "attempt",
    "error_message",
]
