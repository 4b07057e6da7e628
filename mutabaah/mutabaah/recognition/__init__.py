"""
Speech recognition interface for Mutabaah library.
"""

from mutabaah.recognition.base import BaseSpeechRecognizer, ErrorCallback, ResultCallback

__all__ = [
    "BaseSpeechRecognizer",
    "ResultCallback",
    "ErrorCallback",
]
