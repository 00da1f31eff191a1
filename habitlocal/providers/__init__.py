from habitlocal.providers.base import BaseProvider
from habitlocal.providers.gemini_provider import GeminiProvider


__all__ = [
    "BaseProvider",
    "GeminiProvider",
]
