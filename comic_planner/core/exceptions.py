"""
Comic Planner Custom Exceptions

Exception classes raised by the planning pipeline.
"""

from typing import Optional


class PlannerError(Exception):
    """Base exception for all comic planner errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================

class ConfigurationError(PlannerError):
    """Raised when a provider or tier is misconfigured."""
    pass


# =============================================================================
# MODEL CALL ERRORS
# =============================================================================

class ResponseParseError(PlannerError):
    """Raised when a model response cannot be turned into JSON."""

    def __init__(self, reason: str, preview: str = ""):
        message = f"Response is not JSON: {reason}"
        details = {}
        if preview:
            details["preview"] = preview
        super().__init__(message, details)
        self.reason = reason


class ModelInvocationError(PlannerError):
    """Raised when a model call fails on every allowed attempt."""

    def __init__(self, label: str, attempts: int, last_error: Optional[BaseException] = None):
        message = f"{label} failed after {attempts} attempt(s)"
        details = {"label": label, "attempts": attempts}
        if last_error is not None:
            details["last_error"] = str(last_error)
        super().__init__(message, details)
        self.label = label
        self.attempts = attempts
        self.last_error = last_error


# =============================================================================
# PIPELINE ERRORS
# =============================================================================

class PipelineStageError(PlannerError):
    """Raised when a stage the rest of the pipeline depends on fails."""

    def __init__(self, stage_name: str, reason: str):
        message = f"Stage '{stage_name}' failed: {reason}"
        super().__init__(message, {"stage": stage_name})
        self.stage_name = stage_name
        self.reason = reason
