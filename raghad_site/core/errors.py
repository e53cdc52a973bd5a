from __future__ import annotations


class SiteError(Exception):
    """Base exception for this project."""


class ConfigError(SiteError):
    """Raised when configuration is invalid or incomplete."""

    def __init__(self, message: str, *, path: str | None = None):
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path


class FormSubmissionError(SiteError):
    """A form POST failed (transport error or non-2xx response)."""

    def __init__(self, message: str, *, action: str, status: int | None = None):
        super().__init__(message)
        self.action = action
        self.status = status


class HttpStatusError(SiteError):
    def __init__(self, status: int, *, url: str):
        super().__init__(f"HTTP error! status: {status}")
        self.status = status
        self.url = url
