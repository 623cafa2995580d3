from pydantic import BaseModel, Field


class IngredientClassificationResponse(BaseModel):
    """Ingredient classification response"""
    ingredient: str = Field(..., description="Ingredient as supplied by the caller")
    classification: str = Field(..., description="Dietary classification, e.g. 'vegan', 'vegetarian' or 'regular'")
