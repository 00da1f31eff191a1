class HabitLocalError(Exception):
    """Base class for errors raised by habitlocal services."""


class MissingApiKeyError(HabitLocalError):
    """No Gemini API key is configured."""


class AIServiceError(HabitLocalError):
    """The LLM provider rejected or failed the request."""


class AIResponseFormatError(AIServiceError):
    """The LLM answered, but not in the shape the flow asked for."""
