"""Food image analysis using a vision-language model."""

import base64
import logging
from dataclasses import dataclass
from typing import Protocol

from food_tracker.domain.errors import AnalysisError, ParseError
from food_tracker.domain.nutrition import FoodAnalysis
from food_tracker.services.accumulator import accumulate
from food_tracker.services.extraction import extract_food_items

FOOD_ANALYSIS_PROMPT = """\
Analyze this food image and provide detailed nutritional information in JSON format.

For each food item visible in the image, provide:
1. name - the name of the food item
2. calories - estimated calories
3. quantity - estimated serving size (e.g., "1 cup", "100g", "1 piece")
4. nutrients - object containing:
  - protein (g)
  - carbohydrates (g)
  - fat (g)
  - fiber (g)
  - sugar (g)
  - sodium (mg)
  - calcium (mg)
  - iron (mg)
  - vitaminA (mcg)
  - vitaminC (mg)
  - potassium (mg)

Return the response as a JSON object with this structure:
{
  "foodItems": [
    {
      "name": "string",
      "calories": number,
      "quantity": "string",
      "nutrients": {
        "protein": number,
        "carbohydrates": number,
        "fat": number,
        "fiber": number,
        "sugar": number,
        "sodium": number,
        "calcium": number,
        "iron": number,
        "vitaminA": number,
        "vitaminC": number,
        "potassium": number
      }
    }
  ]
}

Be as accurate as possible with your estimates. \
If you cannot identify a food item, describe it as best as you can."""

_logger = logging.getLogger(__name__)


class InferenceClient(Protocol):
    """Interface for a multimodal model that answers with free-form text."""

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
        """Return the model's text reply for an image and prompt."""


@dataclass
class FoodImageAnalyzer:
    """Sends meal photos to the model and totals the detected items."""

    client: InferenceClient
    model: str
    reasoning_effort: str | None = None
    store: bool = False

    async def analyze(
        self, image_base64: str, mime_type: str = "image/jpeg"
    ) -> FoodAnalysis:
        """Analyze a base64-encoded image in a single model round trip."""
        _logger.info(
            "Analyzing food image: mime_type=%s size=%s", mime_type, len(image_base64)
        )
        try:
            reply = await self.client.generate(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                prompt=FOOD_ANALYSIS_PROMPT,
                image_base64=image_base64,
                mime_type=mime_type,
            )
        except Exception as exc:
            raise AnalysisError(f"inference request failed: {exc}") from exc
        if not reply or not reply.strip():
            raise AnalysisError("empty response")

        try:
            items = extract_food_items(reply)
        except ParseError as exc:
            raise AnalysisError(f"unreadable response: {exc}") from exc

        totals = accumulate(items)
        _logger.info(
            "Food analysis complete: items=%s total_calories=%s",
            len(items),
            totals.total_calories,
        )
        return FoodAnalysis(
            food_items=items,
            total_calories=totals.total_calories,
            total_nutrients=totals.total_nutrients,
        )

    async def analyze_bytes(self, image_bytes: bytes) -> FoodAnalysis:
        """Analyze raw image bytes, inferring the MIME type from the header."""
        encoded = base64.b64encode(image_bytes).decode("utf-8")
        return await self.analyze(encoded, detect_mime_type(image_bytes))


def detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
