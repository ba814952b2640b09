"""Custom exception classes for lh-audit."""

from typing import Optional


class LhAuditError(Exception):
    """Base exception for lh-audit failures."""

    pass


class ReportNotFoundError(LhAuditError):
    """No Lighthouse report at the given path, or none could be found."""

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.hint = hint


class ReportLoadError(LhAuditError):
    """Report file could not be read or is not valid JSON."""

    pass


class WriteError(LhAuditError):
    """Rendered output could not be saved."""

    pass


class ConfigError(LhAuditError):
    """Invalid configuration value."""

    pass
