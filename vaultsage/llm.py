"""Text-completion client backed by the OpenAI chat completions API."""

import logging

from openai import OpenAI, OpenAIError

from vaultsage.errors import ExternalServiceError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"

SYSTEM_PROMPT = (
    "You are a helpful assistant analyzing a personal knowledge vault of markdown notes. "
    "Follow the requested output format exactly."
)


class CompletionClient:
    """Sends one prompt, returns the generated text.

    The OpenAI client is created on first use so that a missing API key only
    fails the operation that actually needs the service.
    """

    def __init__(self, api_key: str, model: str = DEFAULT_MODEL, client: OpenAI | None = None) -> None:
        self.api_key = api_key
        self.model = model
        self._client = client

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            if not self.api_key:
                raise ExternalServiceError("OPENAI_API_KEY is not set")
            self._client = OpenAI(api_key=self.api_key)
        return self._client

    def complete(
        self,
        prompt: str,
        system: str | None = None,
        temperature: float = 0.3,
        max_tokens: int | None = None,
        model: str | None = None,
    ) -> str:
        """Generate a completion for a prompt.

        Args:
            prompt: The user prompt
            system: Optional system prompt (defaults to SYSTEM_PROMPT)
            temperature: Sampling temperature
            max_tokens: Optional cap on generated tokens
            model: Optional model override

        Returns:
            The generated text, stripped

        Raises:
            ExternalServiceError: If the key is missing or the API call fails
        """
        kwargs = {}
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens

        model_name = model or self.model
        logger.debug(f"Requesting completion from {model_name} ({len(prompt)} chars)")

        try:
            response = self.client.chat.completions.create(
                model=model_name,
                messages=[
                    {"role": "system", "content": system or SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=temperature,
                **kwargs,
            )
        except OpenAIError as e:
            raise ExternalServiceError(str(e)) from e

        return (response.choices[0].message.content or "").strip()

    def probe_models(self, models: list[str]) -> dict[str, str | None]:
        """Check which models answer a trivial prompt.

        Returns:
            Dict mapping model name to None when it works, or the error message
        """
        results: dict[str, str | None] = {}
        for name in models:
            try:
                self.complete("Hello", model=name, max_tokens=5)
                results[name] = None
            except ExternalServiceError as e:
                results[name] = str(e)[:100]
        return results
