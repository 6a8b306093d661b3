"""Recipe store: a single `recipes` table keyed by (recipe id, query).

Ingredient lists are stored joined by ", " and nutrients as three amount
columns. Rows are written once and never updated.
"""

import contextlib
import logging
from typing import AsyncIterator

from databases import Database
from databases.interfaces import Record

from recipe_finder.errors import PersistFailure, StoreUnavailable
from recipe_finder.models import NormalizedQuery, Nutrient, Recipe, RecipeSet


logger = logging.getLogger(__name__)


CREATE_RECIPES_TABLE = """
CREATE TABLE IF NOT EXISTS recipes (
    id INTEGER NOT NULL,
    sorted_query VARCHAR(512) NOT NULL,
    position INTEGER NOT NULL,
    name VARCHAR(256) NOT NULL,
    used_ingredients TEXT NOT NULL,
    missing_ingredients TEXT NOT NULL,
    calories DOUBLE PRECISION,
    carbohydrates DOUBLE PRECISION,
    protein DOUBLE PRECISION,
    PRIMARY KEY (id, sorted_query)
)
"""


# Only the ranking of a cached row ever changes.
SET_POSITION = """
UPDATE recipes SET position = :position
WHERE id = :id AND sorted_query = :sorted_query
"""


GET_RECIPES = """
SELECT id, name, used_ingredients, missing_ingredients, calories, carbohydrates, protein
FROM recipes WHERE sorted_query = :sorted_query ORDER BY position
"""


_COLUMNS = """
recipes (id, sorted_query, position, name, used_ingredients, missing_ingredients,
calories, carbohydrates, protein)
VALUES (:id, :sorted_query, :position, :name, :used_ingredients,
:missing_ingredients, :calories, :carbohydrates, :protein)
"""


INSERT_IGNORE = {
    "sqlite": f"INSERT OR IGNORE INTO {_COLUMNS}",
    "mysql": f"INSERT IGNORE INTO {_COLUMNS}",
    "postgresql": f"INSERT INTO {_COLUMNS} ON CONFLICT DO NOTHING",
}


INGREDIENT_SEPARATOR = ", "


# Column name, nutrient name, unit. Units are fixed by the API for these three.
NUTRIENT_COLUMNS = (
    ("calories", "Calories", "kcal"),
    ("carbohydrates", "Carbohydrates", "g"),
    ("protein", "Protein", "g"),
)


def _split(joined: str) -> tuple[str, ...]:
    return tuple(joined.split(INGREDIENT_SEPARATOR)) if joined else ()


def _recipe_from_row(record: Record) -> Recipe:
    row = record._mapping  # pyright: ignore[reportPrivateUsage]
    nutrients = tuple(
        Nutrient(name=name, amount=float(row[column]), unit=unit)
        for column, name, unit in NUTRIENT_COLUMNS
        if row[column] is not None
    )
    return Recipe(
        id=row["id"],
        title=row["name"],
        used_ingredients=_split(row["used_ingredients"]),
        missed_ingredients=_split(row["missing_ingredients"]),
        nutrients=nutrients,
    )


def _values(query: NormalizedQuery, position: int, recipe: Recipe) -> dict[str, object]:
    values: dict[str, object] = {
        "id": recipe.id,
        "sorted_query": query,
        "position": position,
        "name": recipe.title,
        "used_ingredients": INGREDIENT_SEPARATOR.join(recipe.used_ingredients),
        "missing_ingredients": INGREDIENT_SEPARATOR.join(recipe.missed_ingredients),
    }
    for column, name, _ in NUTRIENT_COLUMNS:
        nutrient = recipe.nutrient(name)
        values[column] = None if nutrient is None else nutrient.amount
    return values


class RecipesRepository:
    """Recipes repository."""

    def __init__(self, db: Database) -> None:
        self.db = db

    @property
    def insert_ignore(self) -> str:
        dialect = self.db.url.dialect
        try:
            return INSERT_IGNORE[dialect]
        except KeyError:
            raise PersistFailure(f"Unsupported store dialect: {dialect}") from None

    async def create_table(self) -> None:
        await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
            query=CREATE_RECIPES_TABLE
        )

    async def lookup(self, query: NormalizedQuery) -> RecipeSet:
        try:
            rows = await self.db.fetch_all(  # pyright: ignore[reportUnknownMemberType]
                GET_RECIPES, values={"sorted_query": query}
            )
        except Exception as e:
            raise StoreUnavailable(f"Could not read cached recipes: {e}") from e
        return [_recipe_from_row(row) for row in rows]

    async def add(self, query: NormalizedQuery, recipes: RecipeSet) -> None:
        insert = self.insert_ignore
        try:
            for position, recipe in enumerate(recipes):
                await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
                    insert, values=_values(query, position, recipe)
                )
                # Recipes cached by an earlier, shorter fetch take the new rank.
                await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
                    SET_POSITION,
                    values={"id": recipe.id, "sorted_query": query, "position": position},
                )
        except Exception as e:
            raise PersistFailure(f"Could not cache recipes for {query}: {e}") from e


@contextlib.asynccontextmanager
async def connect_store(url: str) -> AsyncIterator[RecipesRepository | None]:
    """Connected repository for the run, or None when the store is down.

    A missing driver or an unknown URL scheme counts as the store being down.
    """
    db: Database | None = None
    try:
        db = Database(url)
        await db.connect()
        repository = RecipesRepository(db)
        await repository.create_table()
    except Exception as e:
        logger.warning("Recipe store unavailable, fetching only: %s", e)
        repository = None

    try:
        yield repository
    finally:
        if db is not None and db.is_connected:
            await db.disconnect()
