import httpx

from providers.base import BaseProvider

DEFAULT_OPENAI_MODEL = "gpt-5"


class OpenAIProvider(BaseProvider):
    """Provider for the OpenAI chat-completions API using standard httpx."""

    endpoint = "https://api.openai.com/v1/chat/completions"

    @property
    def name(self) -> str:
        return "openai"

    async def generate(self, prompt: str) -> dict:
        used_model = self.model or DEFAULT_OPENAI_MODEL
        try:
            headers = {
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            }
            body = {
                "model": used_model,
                "messages": [{"role": "user", "content": prompt}],
                "max_completion_tokens": 1024,
            }

            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.endpoint, headers=headers, json=body)
                response.raise_for_status()
                data = response.json()
                text = data["choices"][0]["message"]["content"] if data.get("choices") else None

            return self._result(used_model, text=text)
        except httpx.TimeoutException:
            return self._result(used_model, error="Timeout")
        except Exception as e:
            return self._result(used_model, error=str(e))
