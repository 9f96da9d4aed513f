"""Tests for tutoring prompt composition and provider error mapping."""

import asyncio

import pytest

from services.tutor_service import (
    TutorConfigurationError,
    TutorRateLimitError,
    TutorService,
    TutorServiceError,
    build_prompt,
    classify_provider_error,
    compose_system_prompt,
    load_prompt_library,
)
from tests.conftest import FakeProvider

LIBRARY = load_prompt_library()


class TestComposeSystemPrompt:
    def test_no_preferences_is_persona_only(self):
        assert compose_system_prompt("coding") == LIBRARY["personas"]["coding"]
        assert compose_system_prompt("coding", None) == LIBRARY["personas"]["coding"]

    def test_style_then_custom_instructions(self):
        prompt = compose_system_prompt("writing", {
            "explanation_style": "socratic",
            "custom_instructions": "I like bullet points",
        })
        socratic = LIBRARY["explanation_styles"]["socratic"]
        custom = LIBRARY["custom_instructions_prefix"] + "I like bullet points"

        assert prompt.count(socratic) == 1
        assert prompt.startswith(LIBRARY["personas"]["writing"])
        assert prompt.index(socratic) < prompt.index(custom)
        assert prompt.endswith(custom)

    def test_block_order_style_complexity_custom(self):
        prompt = compose_system_prompt("math_science", {
            "explanation_style": "concise",
            "complexity_level": "beginner",
            "custom_instructions": "Use SI units",
        })
        expected = "\n\n".join([
            LIBRARY["personas"]["math_science"],
            LIBRARY["explanation_styles"]["concise"],
            LIBRARY["complexity_levels"]["beginner"],
            LIBRARY["custom_instructions_prefix"] + "Use SI units",
        ])
        assert prompt == expected

    def test_unknown_values_add_nothing(self):
        prompt = compose_system_prompt("social_studies", {
            "explanation_style": "interpretive_dance",
            "complexity_level": "expert",
        })
        assert prompt == LIBRARY["personas"]["social_studies"]

    def test_blank_custom_instructions_skipped(self):
        prompt = compose_system_prompt("coding", {"custom_instructions": "   \n"})
        assert LIBRARY["custom_instructions_prefix"] not in prompt

    def test_unknown_category(self):
        with pytest.raises(ValueError):
            compose_system_prompt("astrology")


class TestBuildPrompt:
    def test_transcript_layout(self):
        history = [
            {"role": "user", "content": "What is velocity?"},
            {"role": "assistant", "content": "What do you think it measures?"},
            {"role": "user", "content": "Speed?"},
        ]
        prompt = build_prompt("math_science", history)
        assert prompt.endswith(
            "Student: What is velocity?\n\n"
            "Tutor: What do you think it measures?\n\n"
            "Student: Speed?\n\n"
            "Tutor:"
        )


class TestErrorClassification:
    @pytest.mark.parametrize("raw", [
        "429 Too Many Requests",
        "Resource has been exhausted (e.g. check quota).",
        "rate limit exceeded",
    ])
    def test_rate_limit(self, raw):
        assert isinstance(classify_provider_error("gemini", raw), TutorRateLimitError)

    def test_bad_key(self):
        error = classify_provider_error("gemini", "400 API key not valid. Please pass a valid API key.")
        assert isinstance(error, TutorConfigurationError)
        assert error.message.startswith("Gemini API key is invalid")

    def test_generate_is_not_a_rate_limit(self):
        error = classify_provider_error("gemini", "Failed to generate content")
        assert type(error) is TutorServiceError
        assert error.message == "Failed to get AI response. Please try again."


class TestTutorService:
    def test_reply(self):
        provider = FakeProvider(text="Think about displacement.")
        reply = asyncio.run(TutorService(provider).get_chat_response(
            "math_science", [{"role": "user", "content": "hi"}]
        ))
        assert reply == "Think about displacement."
        assert provider.prompts[0].endswith("Student: hi\n\nTutor:")

    def test_empty_text_gives_fallback(self):
        reply = asyncio.run(TutorService(FakeProvider(text="")).get_chat_response(
            "coding", [{"role": "user", "content": "hi"}]
        ))
        assert reply == LIBRARY["fallback_reply"]

    def test_missing_provider(self):
        service = TutorService(None, provider_name="gemini")
        assert not service.is_configured
        with pytest.raises(TutorConfigurationError, match="not configured"):
            asyncio.run(service.get_chat_response("coding", []))

    def test_provider_failure(self):
        service = TutorService(FakeProvider(error="quota exceeded"))
        with pytest.raises(TutorRateLimitError):
            asyncio.run(service.get_chat_response("coding", [{"role": "user", "content": "hi"}]))
