from __future__ import annotations

import logging
from pathlib import Path
from threading import Lock
from typing import Callable

from wandering_trades.core.data import (
    ConfigError,
    EnchantmentRegistry,
    MaterialRegistry,
    TradeCatalog,
    ensure_default_config,
    load_config_file,
    load_trade_catalog,
)
from wandering_trades.core.engine import SpawnGate, WeightedSampler
from wandering_trades.core.events import CatalogReloaded, EntitySpawned, EventBus
from wandering_trades.host.scheduler import EntityScheduler
from wandering_trades.settings import PluginSettings, load_settings


LOG = logging.getLogger(__name__)


class TradePlugin:
    """Owns the live catalog and wires the spawn gate to the event bus.

    Components get this object (or its ``current_catalog`` callable) passed
    in; there is no process-wide instance.
    """

    def __init__(
        self,
        config_path: str | Path,
        scheduler: EntityScheduler,
        *,
        event_bus: EventBus | None = None,
        materials: MaterialRegistry | None = None,
        enchantments: EnchantmentRegistry | None = None,
        sampler: WeightedSampler | None = None,
        settings: PluginSettings | None = None,
    ) -> None:
        self.config_path = Path(config_path)
        self.settings = settings if isinstance(settings, PluginSettings) else load_settings()
        self.event_bus = event_bus if isinstance(event_bus, EventBus) else EventBus()
        self.materials = materials if isinstance(materials, MaterialRegistry) else MaterialRegistry()
        self.enchantments = enchantments if isinstance(enchantments, EnchantmentRegistry) else EnchantmentRegistry()
        self._catalog = TradeCatalog()
        self._catalog_lock = Lock()
        self._unsubscribe: Callable[[], None] | None = None
        self.spawn_gate = SpawnGate(
            self.current_catalog,
            scheduler,
            sampler=sampler,
            materials=self.materials,
            target_type=self.settings.target_type,
            cleanup_delay_ticks=self.settings.cleanup_ticks,
            event_bus=self.event_bus,
        )

    @property
    def catalog(self) -> TradeCatalog:
        return self._catalog

    @property
    def enabled(self) -> bool:
        return self._unsubscribe is not None

    def current_catalog(self) -> TradeCatalog:
        # Single reference read: readers get the old or the new snapshot.
        return self._catalog

    def _publish_catalog(self, catalog: TradeCatalog) -> None:
        with self._catalog_lock:
            self._catalog = catalog

    def load_catalog(self) -> TradeCatalog:
        config = load_config_file(self.config_path)
        return load_trade_catalog(config, materials=self.materials, enchantments=self.enchantments)

    def enable(self) -> None:
        if self.enabled:
            return
        try:
            ensure_default_config(self.config_path)
        except OSError as exc:
            LOG.warning("plugin: cannot write default config to %s: %s", self.config_path, exc)
        try:
            self._publish_catalog(self.load_catalog())
        except ConfigError as exc:
            LOG.warning("plugin: %s; starting with no custom trades", exc)
        self._unsubscribe = self.event_bus.subscribe(EntitySpawned, self.spawn_gate.on_spawn)
        LOG.info("plugin: enabled, wandering traders will now sell custom trades")
        LOG.info("plugin: loaded %s custom trades", len(self._catalog))

    def disable(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.spawn_gate.clear()
        LOG.info("plugin: disabled")

    def reload(self) -> TradeCatalog:
        """Re-read the config file and swap the catalog in one step.

        A ConfigError leaves the previous catalog in place and propagates.
        """
        catalog = self.load_catalog()
        self._publish_catalog(catalog)
        LOG.info("plugin: reloaded %s custom trades", len(catalog))
        self.event_bus.publish(CatalogReloaded(trade_count=len(catalog)))
        return catalog


def build_plugin(
    scheduler: EntityScheduler,
    *,
    config_path: str | Path | None = None,
    event_bus: EventBus | None = None,
    sampler: WeightedSampler | None = None,
    settings: PluginSettings | None = None,
    enable: bool = True,
) -> TradePlugin:
    resolved = settings if isinstance(settings, PluginSettings) else load_settings()
    plugin = TradePlugin(
        config_path if config_path is not None else resolved.config_path,
        scheduler,
        event_bus=event_bus,
        sampler=sampler,
        settings=resolved,
    )
    if enable:
        plugin.enable()
    return plugin
