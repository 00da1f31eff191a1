"""
llm_service.py — Text-completion client
Turns a prompt into text through the Gemini provider using the stored API
key. One request per call: no retries and no fallback provider. Optional
TTL caching and running response-time stats.
"""

import logging
import time
from datetime import datetime, timezone

from habitlocal.config import AI_CACHE_TTL, GEMINI_MODEL
from habitlocal.errors import AIServiceError, MissingApiKeyError
from habitlocal.providers.gemini_provider import GeminiProvider
from habitlocal.services.cache_service import ResponseCache
from habitlocal.services.key_manager import KeyManager

logger = logging.getLogger(__name__)

INVALID_KEY_MARKER = "API key not valid"


class LLMClient:
    """complete(prompt) -> text, backed by a provider class."""

    def __init__(
        self,
        key_manager: KeyManager,
        provider_class=GeminiProvider,
        model: str | None = GEMINI_MODEL,
        cache_ttl: int = AI_CACHE_TTL,
    ):
        self.key_manager = key_manager
        self.provider_class = provider_class
        self.model = model
        self.cache = ResponseCache()
        self.cache_ttl = cache_ttl
        self.stats = {
            "total_calls": 0,
            "failures": 0,
            "avg_response_time": 0.0,
            "last_used": None,
        }

    # ------------------------------------------------------------------
    async def complete(self, prompt: str) -> str:
        api_key = self.key_manager.get_api_key()
        if not api_key:
            logger.error("Missing Gemini API key.")
            raise MissingApiKeyError("Missing Gemini API key. Please set it in the app settings.")

        if self.cache_ttl > 0:
            cached = self.cache.get(prompt, self.model or "")
            if cached is not None:
                return cached

        provider = self.provider_class(api_key=api_key)
        t0 = time.time()
        result = await provider.complete(prompt, self.model)
        elapsed = round(time.time() - t0, 3)

        if result.get("status") == "success" and result.get("text"):
            self._record(elapsed, True)
            self.cache.set(prompt, self.model or "", result["text"], self.cache_ttl)
            return result["text"]

        self._record(elapsed, False)
        error = result.get("error") or f"{provider.name} returned no text"
        logger.error(f"Error calling {provider.name}: {error}")
        if INVALID_KEY_MARKER in str(error):
            raise AIServiceError("Invalid Gemini API key. Please check and update your key in settings.")
        raise AIServiceError("Failed to get response from AI. Ensure your API key is valid and has quota.")

    # ------------------------------------------------------------------
    def _record(self, elapsed: float, success: bool):
        s = self.stats
        s["total_calls"] += 1
        if not success:
            s["failures"] += 1
        s["avg_response_time"] = round(
            (s["avg_response_time"] * (s["total_calls"] - 1) + elapsed) / s["total_calls"], 3
        )
        s["last_used"] = datetime.now(timezone.utc).isoformat()

    def get_stats(self) -> dict:
        return {**self.stats, "cache": self.cache.get_stats()}
