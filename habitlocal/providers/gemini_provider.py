import asyncio

from habitlocal.config import GEMINI_MODEL
from habitlocal.providers.base import BaseProvider

# Block medium and above for every harm category
SAFETY_CATEGORIES = [
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
]


class GeminiProvider(BaseProvider):
    """Provider for Google Gemini API using the official SDK."""

    def __init__(self, api_key: str, timeout: float = 30.0):
        self.api_key = api_key
        self.timeout = timeout

    @property
    def name(self) -> str:
        return "gemini"

    async def complete(self, prompt: str, model: str | None = None) -> dict:
        used_model = model or GEMINI_MODEL
        try:
            import google.generativeai as genai
            # genai is configured module-wide, so set the key before every call
            genai.configure(api_key=self.api_key)

            g_model = genai.GenerativeModel(
                model_name=used_model,
                safety_settings=[
                    {"category": c, "threshold": "BLOCK_MEDIUM_AND_ABOVE"}
                    for c in SAFETY_CATEGORIES
                ],
            )

            response = await asyncio.wait_for(
                g_model.generate_content_async(prompt), timeout=self.timeout
            )

            return {
                "text": response.text,
                "provider": self.name,
                "model": used_model,
                "status": "success",
                "error": None,
            }
        except asyncio.TimeoutError:
            return {
                "text": None,
                "provider": self.name,
                "model": used_model,
                "status": "failed",
                "error": "Timeout",
            }
        except Exception as e:
            return {
                "text": None,
                "provider": self.name,
                "model": used_model,
                "status": "failed",
                "error": str(e),
            }
