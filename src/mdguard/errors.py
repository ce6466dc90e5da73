"""Exception classes for mdguard.

Sanitizing content never raises: these exceptions surface at configuration
time, or from a pipeline stage when ``SanitizeConfig.strict`` is set.
"""

from __future__ import annotations


class MdguardError(Exception):
    """Base exception for all mdguard errors.

    Subclass this for specific error categories.
    """

    pass


class ConfigError(MdguardError):
    """Invalid sanitizer configuration.

    Raised when a SanitizeConfig field has the wrong type or an allowlist
    contains names that can never match a tag or attribute.
    """

    def __init__(self, field: str, message: str) -> None:
        """Initialize config error.

        Args:
            field: Name of the offending SanitizeConfig field
            message: Description of the problem
        """
        self.field = field
        super().__init__(f"Invalid config field '{field}': {message}")


class RenderError(MdguardError):
    """A pipeline stage failed on its input.

    Only raised in strict mode. Otherwise the stage logs a warning and
    degrades to a best-effort result.
    """

    def __init__(self, stage: str, message: str) -> None:
        """Initialize render error.

        Args:
            stage: Pipeline stage that failed ("markdown" or "sanitize")
            message: Description of the failure
        """
        self.stage = stage
        super().__init__(f"{stage} stage failed: {message}")
