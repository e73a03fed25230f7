"""
Custom exception hierarchy for the guidance normalization layer.

All application exceptions inherit from GuidanceError. Decoders never raise
these; they are reserved for setup-time problems such as bad configuration.
"""


class GuidanceError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(GuidanceError):
    """Invalid or missing configuration."""

    pass
