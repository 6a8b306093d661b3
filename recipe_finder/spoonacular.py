import logging

import httpx

from recipe_finder.config import Config
from recipe_finder.errors import FetchFailure, Unauthorized
from recipe_finder.models import NormalizedQuery


logger = logging.getLogger(__name__)


SEARCH_PATH = "/recipes/complexSearch"


def spoonacular_client_factory(config: Config) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=config.api_url,
        headers={"Accept": "application/json"},
        timeout=config.request_timeout,
    )


def search_params(
    ingredients: NormalizedQuery, number: int, api_key: str
) -> dict[str, str | int]:
    return {
        "apiKey": api_key,
        "includeIngredients": ingredients,
        "number": number,
        "fillIngredients": "true",
        "sort": "min-missing-ingredients",
        "addRecipeNutrition": "true",
        "ignorePantry": "true",
    }


async def fetch_recipes(
    client: httpx.AsyncClient,
    query: NormalizedQuery,
    number: int,
    *,
    api_key: str,
) -> bytes:
    """Raw complexSearch body for `query`, left unparsed for the shaper."""
    logger.info("Fetching %d recipes for %s", number, query)
    try:
        resp = await client.get(
            SEARCH_PATH, params=search_params(query, number, api_key)
        )
    except httpx.HTTPError as e:
        raise FetchFailure(f"Could not reach the recipe API: {e}") from e

    if resp.status_code == 401:
        raise Unauthorized("Recipe API rejected the API key (401).")
    if resp.status_code == 402:
        raise FetchFailure("Recipe API daily quota is used up (402).")
    try:
        resp.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise FetchFailure(
            f"Recipe API answered {resp.status_code} for {query}"
        ) from e
    return resp.content
