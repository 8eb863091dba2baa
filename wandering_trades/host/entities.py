from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Sequence, runtime_checkable
from uuid import uuid4

from wandering_trades.core.models import MerchantOffer


WANDERING_TRADER = "WANDERING_TRADER"


@runtime_checkable
class TraderEntity(Protocol):
    unique_id: str
    entity_type: str

    def is_valid(self) -> bool: ...

    def get_recipes(self) -> list[MerchantOffer]: ...

    def set_recipes(self, recipes: Sequence[MerchantOffer]) -> None: ...


@dataclass
class SimulatedTrader:
    """In-process stand-in for a host merchant entity."""

    unique_id: str = field(default_factory=lambda: str(uuid4()))
    entity_type: str = WANDERING_TRADER
    recipes: list[MerchantOffer] = field(default_factory=list)
    location: tuple[float, float, float] = (0.0, 64.0, 0.0)
    valid: bool = True
    recipe_updates: int = 0

    def is_valid(self) -> bool:
        return self.valid

    def remove(self) -> None:
        self.valid = False

    def get_recipes(self) -> list[MerchantOffer]:
        return list(self.recipes)

    def set_recipes(self, recipes: Sequence[MerchantOffer]) -> None:
        self.recipes = list(recipes)
        self.recipe_updates += 1
