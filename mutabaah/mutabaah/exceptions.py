"""
Custom exceptions for Mutabaah library.

All exceptions inherit from MutabaahError for easy catching of library-specific errors.
"""

from typing import Any


class MutabaahError(Exception):
    """Base exception for all Mutabaah errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


class RecognitionError(MutabaahError):
    """Raised or reported when the speech recognizer fails."""

    def __init__(
        self,
        message: str,
        surah_id: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if surah_id is not None:
            ctx["surah_id"] = surah_id
        super().__init__(message, ctx)
        self.surah_id = surah_id


class RecognitionUnavailableError(RecognitionError):
    """Raised when listening cannot start (no recognizer, permission denied)."""

    def __init__(self, message: str = "Speech recognition is not available.") -> None:
        super().__init__(message)


class StorageError(MutabaahError):
    """Raised when the key-value store cannot be read or written."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if key:
            ctx["key"] = key
        super().__init__(message, ctx)
        self.key = key


class SessionStateError(MutabaahError):
    """Raised when an operation is not allowed in the controller's current phase."""

    def __init__(self, message: str, phase: str | None = None) -> None:
        ctx = {"phase": phase} if phase else {}
        super().__init__(message, ctx)
        self.phase = phase
