"""Exception hierarchy shared by the mutation engine and the generators."""

from __future__ import annotations


class ScaffolderError(RuntimeError):
    """Base class for fatal scaffolding failures that abort a generator run."""


class HostDocumentMissingError(ScaffolderError, FileNotFoundError):
    """Raised when a manifest that must already exist is absent."""

    def __init__(self, path: object) -> None:
        super().__init__(f"Required file not found: {path}")
        self.path = path


class MalformedDocumentError(ScaffolderError):
    """Raised when a document lacks a structural element the edit depends on."""


class PreconditionError(ScaffolderError):
    """Raised when the target tree is not in the state a generator expects."""


class AnswerError(ScaffolderError, ValueError):
    """Raised when a supplied answer fails validation."""

    def __init__(self, name: str, message: str) -> None:
        super().__init__(f"Invalid value for '{name}': {message}")
        self.name = name
        self.message = message


__all__ = [
    "AnswerError",
    "HostDocumentMissingError",
    "MalformedDocumentError",
    "PreconditionError",
    "ScaffolderError",
]
