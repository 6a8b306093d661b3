from dataclasses import dataclass
from typing import TypeAlias


NormalizedQuery: TypeAlias = str
RecipeSet: TypeAlias = list["Recipe"]


@dataclass(frozen=True)
class Nutrient:
    name: str
    amount: float
    unit: str

    def __str__(self) -> str:
        return f"{self.name}: {self.amount:.2f} {self.unit}"


@dataclass(frozen=True)
class Recipe:
    id: int
    title: str
    used_ingredients: tuple[str, ...] = ()
    missed_ingredients: tuple[str, ...] = ()
    nutrients: tuple[Nutrient, ...] = ()

    def nutrient(self, name: str) -> Nutrient | None:
        for nutrient in self.nutrients:
            if nutrient.name == name:
                return nutrient
        return None
