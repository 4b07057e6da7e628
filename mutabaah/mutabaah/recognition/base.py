"""
Abstract base class for speech recognizers.

This module defines the interface the follow-along controller expects from a
platform speech-recognition service. The recognizer owns microphone access,
permissions and any internal auto-restart on transient end events; none of
that is visible to the controller.
"""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable

from mutabaah.models import RecognitionResult

ResultCallback = Callable[[RecognitionResult], None]
ErrorCallback = Callable[[str], Awaitable[None]]


class BaseSpeechRecognizer(ABC):
    """
    Abstract interface for streaming speech recognition.

    Implementations deliver results one at a time by calling ``on_result``
    and report failures by awaiting ``on_error`` with a readable message.

    Example:
        class PlatformRecognizer(BaseSpeechRecognizer):
            async def start_listening(self, on_result, on_error, language) -> bool:
                if not await self._request_permission():
                    await on_error("Microphone permission denied.")
                    return False
                ...
                return True
    """

    @abstractmethod
    async def start_listening(
        self,
        on_result: ResultCallback,
        on_error: ErrorCallback,
        language: str,
    ) -> bool:
        """
        Start delivering recognition results.

        Args:
            on_result: Called for every partial or final result
            on_error: Awaited with a message when recognition fails
            language: Locale to recognize, e.g. "ar-SA"

        Returns:
            True if listening started, False if recognition is unavailable
            (after reporting the reason through ``on_error``)
        """
        pass

    @abstractmethod
    async def stop_listening(self) -> None:
        """
        Stop delivering results and release the microphone.

        Must be safe to call when not listening.

        Raises:
            RecognitionError: If the platform fails to stop
        """
        pass

    @property
    @abstractmethod
    def is_listening(self) -> bool:
        """Whether the recognizer is currently listening."""
        pass
