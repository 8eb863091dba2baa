from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional


def _frozen_mapping(raw: Mapping[str, int] | None) -> Mapping[str, int]:
    return MappingProxyType(dict(raw or {}))


@dataclass(frozen=True)
class Trade:
    id: str
    result_material: str
    result_amount: int
    cost_material: str
    cost_amount: int
    second_cost_material: Optional[str] = None
    second_cost_amount: int = 0
    max_uses: int = 3
    weight: int = 10
    enabled: bool = True
    enchantments: Mapping[str, int] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        # Copied so that later edits of the caller's dict cannot leak in.
        object.__setattr__(self, "enchantments", _frozen_mapping(self.enchantments))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Trade):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def _key(self) -> tuple:
        return (
            self.id,
            self.result_material,
            self.result_amount,
            self.cost_material,
            self.cost_amount,
            self.second_cost_material,
            self.second_cost_amount,
            self.max_uses,
            self.weight,
            self.enabled,
            tuple(sorted(self.enchantments.items())),
        )

    @property
    def has_second_cost(self) -> bool:
        return self.second_cost_material is not None and self.second_cost_amount > 0

    @property
    def has_enchantments(self) -> bool:
        return bool(self.enchantments)

    def describe(self) -> str:
        text = f"{self.id}: {self.result_amount}x {self.result_material} for {self.cost_amount}x {self.cost_material}"
        if self.has_second_cost:
            text += f" + {self.second_cost_amount}x {self.second_cost_material}"
        return f"{text} (weight {self.weight})"


@dataclass(frozen=True)
class ItemStack:
    material: str
    amount: int
    stored_enchantments: Mapping[str, int] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "stored_enchantments", _frozen_mapping(self.stored_enchantments))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ItemStack):
            return NotImplemented
        return (
            self.material == other.material
            and self.amount == other.amount
            and dict(self.stored_enchantments) == dict(other.stored_enchantments)
        )

    def __hash__(self) -> int:
        return hash((self.material, self.amount, tuple(sorted(self.stored_enchantments.items()))))


@dataclass(frozen=True)
class MerchantOffer:
    """Host-side trade offer: one result for one or two ingredients."""

    result: ItemStack
    ingredients: tuple[ItemStack, ...]
    max_uses: int
    uses: int = 0
    experience_reward: bool = False
    price_scaling: bool = False

    def __post_init__(self) -> None:
        if not 1 <= len(self.ingredients) <= 2:
            raise ValueError(f"MerchantOffer needs 1 or 2 ingredients, got {len(self.ingredients)}")
