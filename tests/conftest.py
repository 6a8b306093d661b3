import json
from pathlib import Path
from typing import Any, AsyncIterator, Callable

import httpx
from databases import Database
import pytest
import pytest_asyncio

from recipe_finder.repository import RecipesRepository


def nutrient(name: str, amount: float, unit: str) -> dict[str, Any]:
    return {"name": name, "amount": amount, "unit": unit}


def ingredient(id: int, name: str) -> dict[str, Any]:
    return {"id": id, "name": name, "amount": 1.0, "unit": "cup"}


def result(
    id: int,
    title: str,
    *,
    used: tuple[str, ...] = ("apples",),
    missed: tuple[str, ...] = ("sugar", "butter"),
) -> dict[str, Any]:
    return {
        "id": id,
        "title": title,
        "usedIngredientCount": len(used),
        "missedIngredientCount": len(missed),
        "usedIngredients": [ingredient(i, n) for i, n in enumerate(used)],
        "missedIngredients": [ingredient(i, n) for i, n in enumerate(missed)],
        "unusedIngredients": [ingredient(99, "flour")],
        "nutrition": {
            "nutrients": [
                nutrient("Calories", 310.5, "kcal"),
                nutrient("Fat", 12.25, "g"),
                nutrient("Carbohydrates", 45.125, "g"),
                nutrient("Sugar", 20.0, "g"),
                nutrient("Protein", 3.5, "g"),
            ]
        },
    }


def payload(*results: dict[str, Any]) -> bytes:
    return json.dumps(
        {"results": list(results), "offset": 0, "number": len(results)}
    ).encode()


@pytest.fixture
def apple_payload() -> bytes:
    return payload(
        result(641803, "Easy & Delish! ~ Apple Crumble ~"),
        result(73474, "Apple Tart", used=("apples", "flour"), missed=()),
        result(715381, "Apple Pie Bars", missed=("oats",)),
    )


def mock_client(
    handler: Callable[[httpx.Request], httpx.Response],
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url="https://api.spoonacular.test",
        transport=httpx.MockTransport(handler),
    )


class RecordingHandler:
    """Answers every request with one canned response and keeps the requests."""

    def __init__(self, body: bytes, status_code: int = 200) -> None:
        self.body = body
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, content=self.body)


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'recipes.db'}"


@pytest_asyncio.fixture
async def repository(db_url: str) -> AsyncIterator[RecipesRepository]:
    db = Database(db_url)
    await db.connect()
    repo = RecipesRepository(db)
    await repo.create_table()
    yield repo
    await db.disconnect()
