"""Extraction of food items from free-form vision model replies."""

import json
import logging
import re

from pydantic import ValidationError

from food_tracker.domain.errors import ParseError
from food_tracker.domain.nutrition import FoodItem

_FENCE_PATTERN = re.compile(r"```[\w+-]*[ \t]*\r?\n?(.*?)```", re.DOTALL)

_logger = logging.getLogger(__name__)


def extract_food_items(raw_text: str) -> list[FoodItem]:
    """Parse a model reply into food items.

    Uses the interior of the first fenced code block when one is present,
    otherwise the whole reply. Entries that fail validation are dropped.
    """
    candidate = _candidate_payload(raw_text)
    try:
        payload = json.loads(candidate)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Reply is not valid JSON: {exc.msg}") from exc
    if not isinstance(payload, dict):
        raise ParseError("Reply JSON is not an object")

    raw_items = payload.get("foodItems")
    if raw_items is None:
        return []
    if not isinstance(raw_items, list):
        raise ParseError("foodItems is not a list")

    items: list[FoodItem] = []
    for index, raw_item in enumerate(raw_items):
        try:
            items.append(FoodItem.model_validate(raw_item))
        except ValidationError as exc:
            _logger.warning(
                "Dropping invalid food item at index %s: %s",
                index,
                exc.errors(include_url=False),
            )
    return items


def _candidate_payload(raw_text: str) -> str:
    match = _FENCE_PATTERN.search(raw_text)
    if match:
        return match.group(1).strip()
    return raw_text.strip()
