from __future__ import annotations

import logging
import random
from typing import Protocol

from wandering_trades.core.data.trade_catalog import TradeCatalog
from wandering_trades.core.models import Trade


LOG = logging.getLogger(__name__)


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...

    def randrange(self, stop: int) -> int: ...


class WeightedSampler:
    """Weighted draw of trades without replacement.

    The weighted pool is rebuilt from the remaining trades before every
    draw, so a picked trade can never come back and the odds of the others
    are re-normalised. Cost grows with catalog size times weight, which is
    fine for a few dozen entries; larger catalogs would want an alias table
    or a Fenwick tree with the same contract.
    """

    def __init__(self, rng: RandomSource | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()

    def target_count(self, catalog: TradeCatalog) -> int:
        low = catalog.get_min_trades()
        # max < min is tolerated in config: the span collapses to one value.
        span = max(1, catalog.get_max_trades() - low + 1)
        count = low + self.rng.randint(0, span - 1)
        return max(0, min(count, len(catalog)))

    @staticmethod
    def weighted_pool(trades: list[Trade]) -> list[Trade]:
        pool: list[Trade] = []
        for trade in trades:
            if trade.weight <= 0:
                continue
            pool.extend([trade] * trade.weight)
        return pool

    def select_random_trades(self, catalog: TradeCatalog) -> list[Trade]:
        if len(catalog) == 0:
            return []

        target = self.target_count(catalog)
        available = catalog.get_all_trades()
        selected: list[Trade] = []

        while len(selected) < target and available:
            pool = self.weighted_pool(available)
            if not pool:
                LOG.debug("sampler: no positive weight left after %s draws", len(selected))
                break
            picked = pool[self.rng.randrange(len(pool))]
            selected.append(picked)
            # Remove by identity: two trades may compare equal field by field.
            available = [trade for trade in available if trade is not picked]

        return selected
