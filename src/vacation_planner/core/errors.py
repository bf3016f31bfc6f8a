"""Custom exceptions for the vacation planner."""

class VacationPlannerError(Exception):
    """Base error for planner failures."""


class InvalidConfigurationError(VacationPlannerError, ValueError):
    """Raised when the search configuration is malformed."""


class ProviderError(VacationPlannerError):
    """Raised when the holiday provider fails."""


class StepFailedError(VacationPlannerError):
    """Raised when a pipeline step fails."""
