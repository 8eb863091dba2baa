from __future__ import annotations

import logging
from threading import Lock
from typing import Any, Callable

from wandering_trades.core.data.registry import MaterialRegistry
from wandering_trades.core.data.trade_catalog import TradeCatalog
from wandering_trades.core.events import EntitySpawned, EventBus, TradesApplied
from wandering_trades.host.entities import WANDERING_TRADER
from wandering_trades.host.scheduler import EntityScheduler, seconds_to_ticks

from .offers import build_offer_list
from .sampler import WeightedSampler


LOG = logging.getLogger(__name__)

CLEANUP_DELAY_TICKS = seconds_to_ticks(5)

CatalogProvider = Callable[[], TradeCatalog]


class SpawnGate:
    """Applies custom trades exactly once per spawned trader.

    The claim set only guards admission; entity state is touched solely from
    tasks handed to the scheduler for that entity.
    """

    def __init__(
        self,
        catalog_provider: CatalogProvider,
        scheduler: EntityScheduler,
        *,
        sampler: WeightedSampler | None = None,
        materials: MaterialRegistry | None = None,
        target_type: str = WANDERING_TRADER,
        cleanup_delay_ticks: int = CLEANUP_DELAY_TICKS,
        event_bus: EventBus | None = None,
    ) -> None:
        self.catalog_provider = catalog_provider
        self.scheduler = scheduler
        self.sampler = sampler if isinstance(sampler, WeightedSampler) else WeightedSampler()
        self.materials = materials if isinstance(materials, MaterialRegistry) else MaterialRegistry()
        self.target_type = str(target_type or WANDERING_TRADER).strip().upper()
        self.cleanup_delay_ticks = max(1, int(cleanup_delay_ticks))
        self.event_bus = event_bus
        self._claimed: set[str] = set()
        self._lock = Lock()

    # ---------- claim set ----------
    def claim(self, entity_id: str) -> bool:
        with self._lock:
            if entity_id in self._claimed:
                return False
            self._claimed.add(entity_id)
            return True

    def release(self, entity_id: str) -> None:
        with self._lock:
            self._claimed.discard(entity_id)

    def is_claimed(self, entity_id: str) -> bool:
        with self._lock:
            return entity_id in self._claimed

    def claimed_count(self) -> int:
        with self._lock:
            return len(self._claimed)

    def clear(self) -> None:
        with self._lock:
            self._claimed.clear()

    # ---------- spawn handling ----------
    def on_spawn(self, event: EntitySpawned) -> bool:
        if event.entity_type.strip().upper() != self.target_type:
            return False
        entity = event.entity

        entity_id = str(entity.unique_id)
        if not self.claim(entity_id):
            return False

        def _release() -> None:
            self.release(entity_id)

        def _apply() -> None:
            try:
                self.apply_trades(entity)
            finally:
                if not self.scheduler.run_delayed(entity, _release, self.cleanup_delay_ticks, _release):
                    _release()

        if not self.scheduler.run(entity, _apply, _release):
            # Entity already retired: nothing will ever run for it.
            LOG.debug("spawn_gate: trader %s retired before scheduling", entity_id)
            self.release(entity_id)
            return False
        return True

    def apply_trades(self, entity: Any) -> int:
        """Must run on the entity's owning context."""
        catalog = self.catalog_provider()
        selected = self.sampler.select_random_trades(catalog)
        if not selected:
            LOG.info("spawn_gate: no trades available to apply to trader %s", entity.unique_id)
            return 0

        offers = build_offer_list(
            entity.get_recipes(),
            selected,
            replace_all=catalog.is_replace_all_trades(),
            materials=self.materials,
        )
        entity.set_recipes(offers)
        LOG.debug(
            "spawn_gate: applied %s custom trades to trader %s at %s",
            len(selected),
            entity.unique_id,
            getattr(entity, "location", "?"),
        )

        if self.event_bus is not None:
            self.event_bus.publish(
                TradesApplied(
                    entity_id=str(entity.unique_id),
                    trade_ids=tuple(trade.id for trade in selected),
                    offer_count=len(offers),
                )
            )
        return len(selected)
