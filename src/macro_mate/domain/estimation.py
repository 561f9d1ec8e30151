"""Models for macro estimation results."""

from pydantic import BaseModel, Field


class MacroEstimate(BaseModel):
    """Structured macro estimate returned by the oracle."""

    protein_g: float = Field(ge=0.0, allow_inf_nan=False)
    carbs_g: float = Field(ge=0.0, allow_inf_nan=False)
    fats_g: float = Field(ge=0.0, allow_inf_nan=False)
    calories: float = Field(ge=0.0, allow_inf_nan=False)
    parsed_food_item: str

    @property
    def is_empty(self) -> bool:
        """Return True when the oracle could not identify any macros."""
        return self.protein_g == 0 and self.carbs_g == 0 and self.fats_g == 0
