from pydantic import BaseModel, Field


class IngredientRequest(BaseModel):
    """Ingredient classification request"""
    ingredient: str = Field(..., description="Name of the ingredient to classify", min_length=1)
