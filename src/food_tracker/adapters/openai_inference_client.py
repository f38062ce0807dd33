"""OpenAI Responses API client for food image analysis."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from food_tracker.services.analyzer import InferenceClient


@dataclass
class OpenAIInferenceClient(InferenceClient):
    """Inference client backed by the OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIInferenceClient":
        """Create an OpenAI inference client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        image_base64: str,
        mime_type: str,
    ) -> str | None:
        """Send the prompt and image as one user turn and return the text."""
        request_payload: dict[str, object] = {
            "model": model,
            "input": [
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "input_image",
                            "image_url": f"data:{mime_type};base64,{image_base64}",
                        },
                        {"type": "input_text", "text": prompt},
                    ],
                }
            ],
            "store": store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        return response.output_text
