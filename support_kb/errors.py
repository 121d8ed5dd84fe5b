"""Exception hierarchy for the support knowledge-base tooling."""


class SupportKBError(Exception):
    """Base class for all errors raised by support_kb."""


class ConfigError(SupportKBError):
    """Required configuration is missing or invalid."""


class EmbeddingError(SupportKBError):
    """The embedding endpoint rejected a request or returned garbage."""

    def __init__(self, message: str, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class StorageError(SupportKBError):
    """A chunk store operation failed."""


class PreviewError(SupportKBError):
    """An edit or publish action on a staged preview was rejected."""
