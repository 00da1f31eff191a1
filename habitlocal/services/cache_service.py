"""
cache_service.py — LLM Response Caching
In-memory cache keyed by SHA-256 of (prompt + model).
Supports TTL-based expiry and hit-rate statistics.
"""

import hashlib
import time


class ResponseCache:
    """In-memory LLM response cache with TTL and hit tracking."""

    def __init__(self, clock=time.time):
        # hash → {text, timestamp, ttl, hit_count}
        self._cache: dict[str, dict] = {}
        self._hits: int = 0
        self._misses: int = 0
        self._clock = clock

    # ------------------------------------------------------------------
    @staticmethod
    def _hash(prompt: str, model: str) -> str:
        raw = f"{prompt}||{model}"
        return hashlib.sha256(raw.encode("utf-8")).hexdigest()

    # ------------------------------------------------------------------
    def get(self, prompt: str, model: str) -> str | None:
        """Return cached text or None on miss / expiry."""
        key = self._hash(prompt, model)
        entry = self._cache.get(key)
        if entry is None:
            self._misses += 1
            return None

        age = self._clock() - entry["timestamp"]
        if age > entry["ttl"]:
            del self._cache[key]
            self._misses += 1
            return None

        entry["hit_count"] += 1
        self._hits += 1
        return entry["text"]

    # ------------------------------------------------------------------
    def set(self, prompt: str, model: str, text: str, ttl_seconds: int = 3600):
        """Store a response with a TTL (seconds). ttl_seconds=0 → don't cache."""
        if ttl_seconds <= 0:
            return
        self._cache[self._hash(prompt, model)] = {
            "text": text,
            "timestamp": self._clock(),
            "ttl": ttl_seconds,
            "hit_count": 0,
        }

    # ------------------------------------------------------------------
    def clear_expired(self):
        """Evict all entries past their TTL."""
        now = self._clock()
        expired = [
            k for k, v in self._cache.items()
            if now - v["timestamp"] > v["ttl"]
        ]
        for k in expired:
            del self._cache[k]

    def clear(self):
        self._cache.clear()

    # ------------------------------------------------------------------
    def get_stats(self) -> dict:
        total_lookups = self._hits + self._misses
        return {
            "total_entries": len(self._cache),
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / total_lookups, 4) if total_lookups else 0.0,
        }
