"""Expose constructed client wrappers."""

from .analysis import AnalysisClient
from .gemini import GeminiClient, GeminiModelError
from .speech import SpeechEngine, SpeechRelay

__all__ = [
    "AnalysisClient",
    "GeminiClient",
    "GeminiModelError",
    "SpeechEngine",
    "SpeechRelay",
]
