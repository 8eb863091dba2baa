from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class EntitySpawned:
    entity: Any
    reason: str = "natural"

    @property
    def entity_type(self) -> str:
        return str(getattr(self.entity, "entity_type", "") or "")


@dataclass(frozen=True)
class TradesApplied:
    entity_id: str
    trade_ids: tuple[str, ...]
    offer_count: int


@dataclass(frozen=True)
class CatalogReloaded:
    trade_count: int
