"""OpenAI chat completions client for recipe generation."""

from dataclasses import dataclass

import httpx
from openai import AsyncOpenAI

from recipe_planner.domain.errors import MalformedGenerationResponseError
from recipe_planner.services.generation import RecipeBackend


@dataclass
class OpenAIRecipeBackend(RecipeBackend):
    """Recipe backend backed by the OpenAI chat completions API."""

    client: AsyncOpenAI
    model: str = "gpt-4"
    temperature: float = 0.7

    @classmethod
    def create(
        cls,
        api_key: str,
        model: str,
        temperature: float,
        timeout_seconds: float,
    ) -> "OpenAIRecipeBackend":
        """Create a backend with a managed httpx session."""
        client = AsyncOpenAI(
            api_key=api_key,
            http_client=httpx.AsyncClient(timeout=timeout_seconds),
        )
        return cls(client=client, model=model, temperature=temperature)

    async def complete(self, *, system_prompt: str, prompt: str) -> str:
        """Return the assistant message text for a prompt."""
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
            temperature=self.temperature,
        )
        if not response.choices:
            raise MalformedGenerationResponseError("OpenAI returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise MalformedGenerationResponseError("OpenAI returned an empty response")
        return content

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
