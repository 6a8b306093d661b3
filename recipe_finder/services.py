"""Read-through cache over the recipe API.

A cached query is never refreshed: once the store holds enough recipes for
a query it answers on its own.
"""

import logging

import httpx

from recipe_finder.errors import PersistFailure, StoreUnavailable, UsageError
from recipe_finder.models import NormalizedQuery, RecipeSet
from recipe_finder.repository import RecipesRepository
from recipe_finder.shaping import shape
from recipe_finder.spoonacular import fetch_recipes


logger = logging.getLogger(__name__)


async def cached_recipes(
    query: NormalizedQuery, *, repository: RecipesRepository | None
) -> RecipeSet:
    if repository is None:
        return []
    try:
        return await repository.lookup(query)
    except StoreUnavailable as e:
        logger.warning("%s", e)
        return []


async def resolve(
    query: NormalizedQuery,
    desired_count: int,
    *,
    repository: RecipesRepository | None,
    client: httpx.AsyncClient,
    api_key: str | None,
) -> RecipeSet:
    """Recipes for `query`, from the store when it holds at least
    `desired_count` of them, otherwise fresh from the API.

    The result is not truncated to `desired_count`; the presenter owns that
    bound. Fetch and shaping errors propagate. The API key is only needed
    when the store cannot answer.
    """
    cached = await cached_recipes(query, repository=repository)
    if len(cached) >= desired_count:
        logger.info("Cache hit for %s (%d recipes)", query, len(cached))
        return cached

    logger.info(
        "Cache has %d of %d recipes for %s", len(cached), desired_count, query
    )
    if not api_key:
        raise UsageError("RECIPE_FINDER_API_KEY is not set.")
    body = await fetch_recipes(client, query, desired_count, api_key=api_key)
    recipes = shape(body)

    if repository is not None:
        try:
            await repository.add(query, recipes)
        except PersistFailure as e:
            logger.warning("%s", e)
    return recipes
