import argparse
import asyncio
import logging
import sys
from typing import Sequence

from pydantic import ValidationError
from rich.console import Console

from recipe_finder.config import Config
from recipe_finder.errors import RecipeFinderError, UsageError
from recipe_finder.presenter import present
from recipe_finder.query import normalize, parse_ingredients
from recipe_finder.repository import connect_store
from recipe_finder.services import resolve
from recipe_finder.spoonacular import spoonacular_client_factory


logger = logging.getLogger(__name__)


EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


USAGE = (
    "usage: recipe-finder --ingredients=<ingredient1>,... "
    "--number-of-recipes=<number>"
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="recipe-finder",
        description="Find recipes that use the ingredients you have.",
    )
    parser.add_argument(
        "--ingredients",
        default="",
        help="Comma-separated list of ingredients",
    )
    parser.add_argument(
        "--number-of-recipes",
        "--numberOfRecipes",
        dest="number_of_recipes",
        type=int,
        default=0,
        help="Number of recipes to find",
    )
    return parser


def parse_arguments(argv: Sequence[str] | None = None) -> tuple[list[str], int]:
    args = build_parser().parse_args(argv)
    ingredients = parse_ingredients(args.ingredients)
    if not ingredients or args.number_of_recipes < 1:
        raise UsageError(USAGE)
    return ingredients, args.number_of_recipes


async def run(
    ingredients: list[str],
    number_of_recipes: int,
    *,
    config: Config,
    console: Console | None = None,
) -> None:
    query = normalize(ingredients)

    async with connect_store(config.database_url) as repository:
        async with spoonacular_client_factory(config) as client:
            recipes = await resolve(
                query,
                number_of_recipes,
                repository=repository,
                client=client,
                api_key=config.api_key,
            )
    present(recipes, number_of_recipes, console=console)


def main(argv: Sequence[str] | None = None) -> int:
    try:
        ingredients, number_of_recipes = parse_arguments(argv)
    except UsageError as e:
        print(e, file=sys.stderr)
        return EXIT_USAGE

    try:
        config = Config()
    except ValidationError as e:
        print(f"Invalid RECIPE_FINDER_ settings:\n{e}", file=sys.stderr)
        return EXIT_USAGE

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    try:
        asyncio.run(run(ingredients, number_of_recipes, config=config))
    except UsageError as e:
        print(e, file=sys.stderr)
        return EXIT_USAGE
    except RecipeFinderError as e:
        logger.error("%s", e)
        print(f"Problem fetching recipes: {e}", file=sys.stderr)
        return EXIT_FAILURE
    return EXIT_OK
