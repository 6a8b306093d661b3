from rich.console import Console

from recipe_finder.models import Recipe, RecipeSet


def format_recipe(recipe: Recipe) -> str:
    lines = [
        "",
        "",
        f"Recipe: {recipe.title}",
        f"Used Ingredients: {', '.join(recipe.used_ingredients)}",
        f"Missed Ingredients: {', '.join(recipe.missed_ingredients)}",
        "Nutrients:",
    ]
    lines.extend(str(nutrient) for nutrient in recipe.nutrients)
    return "\n".join(lines)


def present(recipes: RecipeSet, limit: int, *, console: Console | None = None) -> None:
    """Print up to `limit` recipes. Fewer is fine."""
    console = Console() if console is None else console
    for recipe in recipes[: max(limit, 0)]:
        console.print(
            format_recipe(recipe),
            markup=False,
            emoji=False,
            highlight=False,
            soft_wrap=True,
        )
