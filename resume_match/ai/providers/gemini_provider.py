from resume_match.ai.providers.openai_provider import OpenAIProvider


class GeminiProvider(OpenAIProvider):
    """Gemini through Google's OpenAI-compatible endpoint."""

    default_name = "Gemini"
    api_key_env = "GEMINI_API_KEY"
    base_url_env = "GEMINI_BASE_URL"
    default_base_url = "https://generativelanguage.googleapis.com/v1beta/openai/"
