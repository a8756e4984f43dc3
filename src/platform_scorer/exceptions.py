"""
Custom exceptions for the platform scorer.
"""


class PlatformScorerError(Exception):
    """Base exception for the platform scorer."""
    pass


class AssessmentLoadError(PlatformScorerError):
    """Raised when an assessment file cannot be read or validated."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class FeedbackLoadError(PlatformScorerError):
    """Raised when a feedback history file cannot be read or validated."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ConfigError(PlatformScorerError):
    """Raised when a scorer configuration file is invalid."""
    pass


class AdvisorError(PlatformScorerError):
    """Raised when the weight advisor cannot produce a proposal."""
    pass
