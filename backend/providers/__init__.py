from providers.base import BaseProvider
from providers.gemini_provider import GeminiProvider
from providers.openai_provider import OpenAIProvider

# Selectable through TUTOR_PROVIDER
PROVIDERS = {
    "gemini": GeminiProvider,
    "openai": OpenAIProvider,
}

__all__ = [
    "BaseProvider",
    "GeminiProvider",
    "OpenAIProvider",
    "PROVIDERS",
]
