from .bus import EventBus
from .events import CatalogReloaded, EntitySpawned, TradesApplied

__all__ = [
    "EventBus",
    "CatalogReloaded",
    "EntitySpawned",
    "TradesApplied",
]
