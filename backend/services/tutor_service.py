"""
tutor_service.py — AI tutoring
Builds the tutoring prompt from a persona, the student's learning preferences
and the conversation so far, then hands it to the configured provider.

Prompt text lives in tutor_prompts.json and is read once per process.
"""

import json
import logging
import os
import re
from functools import lru_cache

from config import GEMINI_API_KEY, OPENAI_API_KEY, TUTOR_MODEL, TUTOR_PROVIDER, TUTOR_TIMEOUT_SECONDS
from providers import PROVIDERS
from providers.base import BaseProvider

logger = logging.getLogger(__name__)

AI_CATEGORIES = ("math_science", "writing", "social_studies", "coding")

PROMPTS_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "tutor_prompts.json")

_PROVIDER_SETUP = {
    "gemini": {
        "label": "Gemini",
        "api_key": GEMINI_API_KEY,
        "hint": "Get your free API key at https://ai.google.dev/",
    },
    "openai": {
        "label": "OpenAI",
        "api_key": OPENAI_API_KEY,
        "hint": "Set the OPENAI_API_KEY environment variable.",
    },
}

_RATE_LIMIT_PATTERN = re.compile(r"\b429\b|rate[ _-]?limit|quota|resource[ _]exhausted", re.IGNORECASE)
_BAD_KEY_PATTERN = re.compile(r"api[ _-]?key|\b401\b|\b403\b|unauthenticated|permission[ _]denied", re.IGNORECASE)


class TutorServiceError(Exception):
    """The provider could not produce a reply."""

    default_message = "Failed to get AI response. Please try again."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class TutorConfigurationError(TutorServiceError):
    """Missing or rejected provider credential."""


class TutorRateLimitError(TutorServiceError):
    """Provider quota or rate limit hit."""

    default_message = "Rate limit reached. Please try again in a moment."


# ── Prompt composition ───────────────────────────────────────────
@lru_cache(maxsize=1)
def load_prompt_library(path: str = PROMPTS_PATH) -> dict:
    with open(path, encoding="utf-8") as fh:
        return json.load(fh)


def _preference_value(preferences, key: str):
    if isinstance(preferences, dict):
        return preferences.get(key)
    return getattr(preferences, key, None)


def compose_system_prompt(category: str, preferences=None) -> str:
    """Persona prompt plus, in fixed order, style, complexity and custom-instruction blocks.

    ``preferences`` may be a dict or a LearningPreference row. Style and level
    values outside the known sets add nothing.
    """
    library = load_prompt_library()
    try:
        base_prompt = library["personas"][category]
    except KeyError:
        raise ValueError(f"Unknown tutoring category: {category}") from None

    if not preferences:
        return base_prompt

    blocks = [base_prompt]

    style = _preference_value(preferences, "explanation_style")
    if style and style in library["explanation_styles"]:
        blocks.append(library["explanation_styles"][style])

    level = _preference_value(preferences, "complexity_level")
    if level and level in library["complexity_levels"]:
        blocks.append(library["complexity_levels"][level])

    custom = _preference_value(preferences, "custom_instructions")
    if custom and custom.strip():
        blocks.append(library["custom_instructions_prefix"] + custom)

    return "\n\n".join(blocks)


def render_turns(history: list[dict]) -> list[str]:
    lines = []
    for turn in history:
        speaker = "Student" if turn["role"] == "user" else "Tutor"
        lines.append(f"{speaker}: {turn['content']}")
    return lines


def build_prompt(category: str, history: list[dict], preferences=None) -> str:
    """System prompt, then the transcript, then a cue for the tutor's next turn."""
    system_prompt = compose_system_prompt(category, preferences)
    transcript = "\n\n".join(render_turns(history))
    return f"{system_prompt}\n\n{transcript}\n\nTutor:"


def classify_provider_error(provider_name: str, error: str | None) -> TutorServiceError:
    """Map a provider's raw error text onto the tutor error kinds."""
    text = str(error or "")
    if _RATE_LIMIT_PATTERN.search(text):
        return TutorRateLimitError()
    if _BAD_KEY_PATTERN.search(text):
        setup = _PROVIDER_SETUP.get(provider_name, {"label": provider_name, "hint": ""})
        return TutorConfigurationError(f"{setup['label']} API key is invalid. {setup['hint']}".strip())
    return TutorServiceError()


# ── Service ──────────────────────────────────────────────────────
class TutorService:
    """Single-shot tutoring replies; no retry and no fallback provider."""

    def __init__(self, provider: BaseProvider | None, provider_name: str = TUTOR_PROVIDER):
        self.provider = provider
        self.provider_name = provider.name if provider else provider_name

    @property
    def is_configured(self) -> bool:
        return self.provider is not None

    def _missing_key_error(self) -> TutorConfigurationError:
        setup = _PROVIDER_SETUP.get(self.provider_name)
        if setup is None:
            return TutorConfigurationError(f"Unknown tutor provider '{self.provider_name}'.")
        return TutorConfigurationError(f"{setup['label']} API key is not configured. {setup['hint']}")

    async def get_chat_response(self, category: str, history: list[dict], preferences=None) -> str:
        """Return the tutor's reply to the last turn of *history*.

        Raises:
            TutorConfigurationError: no usable credential.
            TutorRateLimitError: the provider throttled the request.
            TutorServiceError: any other provider failure.
        """
        if not self.is_configured:
            raise self._missing_key_error()

        prompt = build_prompt(category, history, preferences)
        result = await self.provider.generate(prompt)

        if result.get("status") != "success":
            logger.warning(f"{self.provider_name} call failed: {result.get('error')}")
            raise classify_provider_error(self.provider_name, result.get("error"))

        text = result.get("text")
        if not text:
            return load_prompt_library()["fallback_reply"]
        return text


def build_provider(name: str = TUTOR_PROVIDER) -> BaseProvider | None:
    """Instantiate the configured provider, or None when it has no key."""
    provider_class = PROVIDERS.get(name)
    setup = _PROVIDER_SETUP.get(name)
    if provider_class is None or setup is None or not setup["api_key"]:
        return None
    return provider_class(api_key=setup["api_key"], model=TUTOR_MODEL, timeout=TUTOR_TIMEOUT_SECONDS)


def log_configuration_status():
    """Called at startup so a missing credential shows up before the first chat."""
    if TUTOR_PROVIDER not in PROVIDERS:
        logger.error(f"Unknown TUTOR_PROVIDER '{TUTOR_PROVIDER}'. Chat requests will fail.")
        return
    setup = _PROVIDER_SETUP[TUTOR_PROVIDER]
    if not setup["api_key"]:
        logger.error(
            f"{setup['label']} API key is not set. Chat requests will fail until it is configured. {setup['hint']}"
        )
    else:
        logger.info(f"Tutor provider: {TUTOR_PROVIDER}")


_tutor_instance = None


def get_tutor_service() -> TutorService:
    """FastAPI dependency — one TutorService per process."""
    global _tutor_instance
    if _tutor_instance is None:
        _tutor_instance = TutorService(build_provider())
    return _tutor_instance
