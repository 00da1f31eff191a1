from abc import ABC, abstractmethod


class BaseProvider(ABC):
    """Abstract base class for text-completion providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The name of this provider (e.g. 'gemini')."""
        ...

    @abstractmethod
    async def complete(self, prompt: str, model: str | None = None) -> dict:
        """
        Send a single-prompt completion request.

        Args:
            prompt: The full prompt text.
            model: Optional model identifier. Provider uses its default if None.

        Returns:
            dict with keys:
                - text: str | None  — the generated text
                - provider: str     — provider name
                - model: str        — model used
                - status: "success" | "failed"
                - error: str | None — error message on failure
        """
        ...
