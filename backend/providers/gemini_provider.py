import asyncio

from providers.base import BaseProvider

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"


class GeminiProvider(BaseProvider):
    """Provider for Google Gemini API using the official SDK."""

    @property
    def name(self) -> str:
        return "gemini"

    @staticmethod
    def _response_text(response) -> str | None:
        # .text raises ValueError when the candidate has no parts (blocked or empty finish)
        try:
            return response.text
        except ValueError:
            return None

    async def generate(self, prompt: str) -> dict:
        used_model = self.model or DEFAULT_GEMINI_MODEL
        try:
            import google.generativeai as genai

            # The SDK is configured module-wide, so set the key right before each call
            genai.configure(api_key=self.api_key)
            g_model = genai.GenerativeModel(model_name=used_model)

            response = await asyncio.wait_for(
                g_model.generate_content_async(prompt), timeout=self.timeout
            )
            return self._result(used_model, text=self._response_text(response))
        except asyncio.TimeoutError:
            return self._result(used_model, error="Timeout")
        except Exception as e:
            return self._result(used_model, error=str(e))
