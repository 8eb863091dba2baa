from __future__ import annotations

import random

from wandering_trades.core.data import CatalogSettings, TradeCatalog
from wandering_trades.core.engine import WeightedSampler
from wandering_trades.core.models import Trade


class _SequenceRng:
    def __init__(self, randint_values: list[int] | None = None, randrange_values: list[int] | None = None) -> None:
        self._randint_values = list(randint_values or [])
        self._randrange_values = list(randrange_values or [])
        self.randrange_calls: list[int] = []

    def randint(self, a: int, b: int) -> int:
        if self._randint_values:
            value = int(self._randint_values.pop(0))
            return max(a, min(b, value))
        return a

    def randrange(self, stop: int) -> int:
        self.randrange_calls.append(stop)
        if self._randrange_values:
            return max(0, min(stop - 1, int(self._randrange_values.pop(0))))
        return 0


def _trade(trade_id: str, weight: int = 10) -> Trade:
    return Trade(
        id=trade_id,
        result_material="BLAZE_ROD",
        result_amount=1,
        cost_material="DIAMOND",
        cost_amount=1,
        weight=weight,
    )


def _catalog(trades: list[Trade], *, low: int, high: int, replace_all: bool = True) -> TradeCatalog:
    settings = CatalogSettings(min_trades=low, max_trades=high, replace_all_trades=replace_all)
    return TradeCatalog(trades=tuple(trades), settings=settings)


def test_empty_catalog_returns_nothing() -> None:
    assert WeightedSampler(_SequenceRng()).select_random_trades(_catalog([], low=2, high=4)) == []


def test_length_within_bounds_and_no_duplicates() -> None:
    trades = [_trade(f"t{i}", weight=1 + (i % 4)) for i in range(12)]
    for seed in range(200):
        rng = random.Random(seed)
        low = rng.randint(0, 6)
        high = rng.randint(low, 12)
        catalog = _catalog(trades, low=low, high=high)

        selected = WeightedSampler(rng).select_random_trades(catalog)

        assert low <= len(selected) <= high
        ids = [t.id for t in selected]
        assert len(ids) == len(set(ids))


def test_all_non_positive_weights_give_empty_result() -> None:
    catalog = _catalog([_trade("a", 0), _trade("b", -5), _trade("c", 0)], low=2, high=3)

    for seed in range(20):
        assert WeightedSampler(random.Random(seed)).select_random_trades(catalog) == []


def test_catalog_smaller_than_min_returns_whole_catalog() -> None:
    catalog = _catalog([_trade("a"), _trade("b"), _trade("c")], low=5, high=8)

    for seed in range(20):
        selected = WeightedSampler(random.Random(seed)).select_random_trades(catalog)
        assert sorted(t.id for t in selected) == ["a", "b", "c"]


def test_zero_target_returns_empty() -> None:
    catalog = _catalog([_trade("a"), _trade("b")], low=0, high=0)

    assert WeightedSampler(random.Random(3)).select_random_trades(catalog) == []


def test_max_below_min_collapses_to_min() -> None:
    catalog = _catalog([_trade(f"t{i}") for i in range(6)], low=4, high=1)
    sampler = WeightedSampler(_SequenceRng(randint_values=[0]))

    assert sampler.target_count(catalog) == 4
    assert len(sampler.select_random_trades(catalog)) == 4


def test_zero_weight_trades_stop_the_draw_early() -> None:
    catalog = _catalog([_trade("a", 5), _trade("b", 0), _trade("c", 0)], low=3, high=3)
    selected = WeightedSampler(random.Random(1)).select_random_trades(catalog)

    assert [t.id for t in selected] == ["a"]


def test_pool_is_rebuilt_without_drawn_trade() -> None:
    catalog = _catalog([_trade("a", 2), _trade("b", 3), _trade("c", 1)], low=3, high=3)
    rng = _SequenceRng(randrange_values=[2, 0, 0])

    selected = WeightedSampler(rng).select_random_trades(catalog)

    # pool a,a,b,b,b,c -> index 2 is "b"; then a,a,c -> "a"; then c.
    assert [t.id for t in selected] == ["b", "a", "c"]
    assert rng.randrange_calls == [6, 3, 1]


def test_weighted_pool_skips_non_positive() -> None:
    pool = WeightedSampler.weighted_pool([_trade("a", 2), _trade("b", 0), _trade("c", -1)])

    assert [t.id for t in pool] == ["a", "a"]


def test_selection_frequency_follows_weights() -> None:
    catalog = _catalog([_trade("light", 1), _trade("heavy", 9)], low=1, high=1)
    sampler = WeightedSampler(random.Random(20260209))
    trials = 10000

    heavy = 0
    for _ in range(trials):
        selected = sampler.select_random_trades(catalog)
        assert len(selected) == 1
        if selected[0].id == "heavy":
            heavy += 1

    assert 0.87 <= heavy / trials <= 0.93


def test_target_count_is_uniform_over_range() -> None:
    catalog = _catalog([_trade(f"t{i}") for i in range(10)], low=2, high=4)
    sampler = WeightedSampler(random.Random(7))

    seen = {sampler.target_count(catalog) for _ in range(300)}

    assert seen == {2, 3, 4}
