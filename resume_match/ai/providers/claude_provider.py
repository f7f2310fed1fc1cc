from resume_match.ai.providers.openai_provider import OpenAIProvider


class ClaudeProvider(OpenAIProvider):
    """Claude through Anthropic's OpenAI-compatible endpoint.

    The endpoint ignores ``response_format``, so JSON is requested in the prompt
    and extracted from the reply. Model lookup is not a reliable liveness check
    there, so the probe is a one-token completion.
    """

    default_name = "Claude"
    api_key_env = "ANTHROPIC_API_KEY"
    base_url_env = "ANTHROPIC_BASE_URL"
    default_base_url = "https://api.anthropic.com/v1/"
    json_mode = False

    async def _probe(self) -> None:
        await self._client.chat.completions.create(
            model=self._model,
            messages=[{"role": "user", "content": "ping"}],
            max_tokens=1,
        )
