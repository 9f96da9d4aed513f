from abc import ABC, abstractmethod


class BaseProvider(ABC):
    """Abstract base class for text-generation providers."""

    def __init__(self, api_key: str, model: str | None = None, timeout: float = 60.0):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout

    @property
    @abstractmethod
    def name(self) -> str:
        """The name of this provider (e.g. 'gemini', 'openai')."""
        ...

    @abstractmethod
    async def generate(self, prompt: str) -> dict:
        """
        Send one fully composed prompt and wait for the completion.

        Args:
            prompt: The complete prompt text, system instructions included.

        Returns:
            dict with keys:
                - text: str | None  — the generated text
                - provider: str     — provider name
                - model: str        — model used
                - status: "success" | "failed"
                - error: str | None — error message on failure
        """
        ...

    def _result(self, model: str, text: str | None = None, error: str | None = None) -> dict:
        return {
            "text": text,
            "provider": self.name,
            "model": model,
            "status": "failed" if error else "success",
            "error": error,
        }
