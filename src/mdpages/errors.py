from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    MISSING_ROOT = "MISSING_ROOT"
    LEGACY_RENDER_OPTIONS = "LEGACY_RENDER_OPTIONS"
    INVALID_CONFIG = "INVALID_CONFIG"


class MdPagesError(Exception):
    """Base for all expected mdpages failure conditions."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "suggestion": self.suggestion,
            }
        }


class ConfigurationError(MdPagesError):
    """Raised when middleware options are invalid.

    Always raised while the middleware is being constructed, never while a
    request is being handled. Integrators see it at startup; clients never do.
    """
