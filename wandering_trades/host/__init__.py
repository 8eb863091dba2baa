from .entities import WANDERING_TRADER, SimulatedTrader, TraderEntity
from .scheduler import TICKS_PER_SECOND, EntityScheduler, TickScheduler, seconds_to_ticks

__all__ = [
    "WANDERING_TRADER",
    "SimulatedTrader",
    "TraderEntity",
    "TICKS_PER_SECOND",
    "EntityScheduler",
    "TickScheduler",
    "seconds_to_ticks",
]
