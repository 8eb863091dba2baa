from .offers import build_offer_list, trade_to_offer
from .sampler import RandomSource, WeightedSampler
from .spawn_gate import CLEANUP_DELAY_TICKS, SpawnGate

__all__ = [
    "CLEANUP_DELAY_TICKS",
    "RandomSource",
    "SpawnGate",
    "WeightedSampler",
    "build_offer_list",
    "trade_to_offer",
]
