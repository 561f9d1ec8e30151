"""Macro estimation service backed by an LLM."""

import base64
import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from macro_mate.domain.errors import EstimationError
from macro_mate.domain.estimation import MacroEstimate

logger = logging.getLogger(__name__)

MACRO_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "protein_g": {"type": "number", "minimum": 0},
        "carbs_g": {"type": "number", "minimum": 0},
        "fats_g": {"type": "number", "minimum": 0},
        "calories": {"type": "number", "minimum": 0},
        "parsed_food_item": {"type": "string"},
    },
    "required": ["protein_g", "carbs_g", "fats_g", "calories", "parsed_food_item"],
    "additionalProperties": False,
}

TEXT_PROMPT = (
    "You are a nutrition expert. Calculate the macronutrients for the food "
    "described below. If quantities are not specified, assume reasonable "
    "serving sizes. If you cannot identify the food or calculate macros, "
    "return zeros.\n\n"
    'Example: "100g chicken breast" -> protein_g 31, carbs_g 0, fats_g 3.6, '
    'calories 165, parsed_food_item "100g chicken breast".\n\n'
    'Food: "{description}"'
)

LABEL_PROMPT = (
    "You are a nutrition expert. Analyze the image of a food nutrition label "
    "and calculate the macronutrients for the weight given below. If the "
    "weight is missing, assume a reasonable serving size. If you cannot read "
    "the label or calculate macros, return zeros.\n\n"
    "Example: a frozen pizza label stating 100g has 20g protein, 30g carbs, "
    "10g fats and 500 kcal, with weight 50g -> protein_g 10, carbs_g 15, "
    'fats_g 5, calories 250, parsed_food_item "A frozen pizza".\n\n'
    'Weight: "{weight}"'
)


class EstimationClient(Protocol):
    """Interface for LLM macro estimation."""

    async def estimate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema: dict[str, object],
        image_data_url: str | None = None,
    ) -> dict[str, object]:
        """Return structured macro data."""


@dataclass
class MacroEstimationService:
    """Service that prepares estimation prompts and validates results."""

    client: EstimationClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def estimate_text(self, description: str) -> MacroEstimate:
        """Estimate macros for a free-text food description."""
        prompt = TEXT_PROMPT.format(description=description.strip())
        return await self._estimate(prompt, image_data_url=None)

    async def estimate_label(self, image_bytes: bytes, weight: str) -> MacroEstimate:
        """Estimate macros from a nutrition label photo and a weight caption."""
        prompt = LABEL_PROMPT.format(weight=weight.strip())
        return await self._estimate(prompt, image_data_url=_to_data_url(image_bytes))

    async def _estimate(self, prompt: str, image_data_url: str | None) -> MacroEstimate:
        try:
            raw = await self.client.estimate(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                prompt=prompt,
                schema=MACRO_SCHEMA,
                image_data_url=image_data_url,
            )
        except EstimationError:
            raise
        except Exception as exc:
            raise EstimationError("Macro estimation request failed") from exc
        try:
            return MacroEstimate.model_validate(raw)
        except ValidationError as exc:
            logger.warning("Invalid estimation payload", extra={"payload": raw})
            raise EstimationError("Macro estimation returned invalid data") from exc


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
