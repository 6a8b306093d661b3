"""Shaping complexSearch payloads into `Recipe` records.

The API ranks results itself (fewest missing ingredients first), so the
payload order is kept as is.
"""

import re

from pydantic import BaseModel, ValidationError

from recipe_finder.errors import MalformedResponse, Unauthorized
from recipe_finder.models import Nutrient, Recipe, RecipeSet


ALLOWED_NUTRIENTS = frozenset({"Calories", "Carbohydrates", "Protein"})


# The API reports a bad key in the body of an otherwise successful response.
UNAUTHORIZED_SIGNATURE = re.compile(
    r'"status"\s*:\s*"failure"\s*,\s*"code"\s*:\s*401'
)


class SearchIngredient(BaseModel):
    """An ingredient entry. Only the name is kept."""

    name: str


class SearchNutrient(BaseModel):
    name: str
    amount: float
    unit: str = ""


class SearchNutrition(BaseModel):
    nutrients: list[SearchNutrient] | None = None


class SearchResult(BaseModel):
    id: int
    title: str
    usedIngredients: list[SearchIngredient] | None = None
    missedIngredients: list[SearchIngredient] | None = None
    nutrition: SearchNutrition | None = None

    def to_recipe(self) -> Recipe:
        nutrients = self.nutrition.nutrients if self.nutrition else None
        return Recipe(
            id=self.id,
            title=self.title,
            used_ingredients=tuple(i.name for i in self.usedIngredients or ()),
            missed_ingredients=tuple(i.name for i in self.missedIngredients or ()),
            nutrients=tuple(
                Nutrient(name=n.name, amount=n.amount, unit=n.unit)
                for n in nutrients or ()
                if n.name in ALLOWED_NUTRIENTS
            ),
        )


class SearchResponse(BaseModel):
    results: list[SearchResult]


def shape(payload: str | bytes) -> RecipeSet:
    if isinstance(payload, bytes):
        payload = payload.decode("utf-8", errors="replace")
    if UNAUTHORIZED_SIGNATURE.search(payload):
        raise Unauthorized("You are not authorized. Check the API key.")

    try:
        response = SearchResponse.model_validate_json(payload)
    except ValidationError as e:
        raise MalformedResponse(f"Unexpected recipe API response: {e}") from e
    return [result.to_recipe() for result in response.results]
