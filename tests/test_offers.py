from __future__ import annotations

import pytest

from wandering_trades.core.engine import build_offer_list, trade_to_offer
from wandering_trades.core.models import ItemStack, MerchantOffer, Trade


def _book() -> Trade:
    return Trade(
        id="soul_speed_book",
        result_material="ENCHANTED_BOOK",
        result_amount=1,
        cost_material="DIAMOND",
        cost_amount=10,
        second_cost_material="BOOK",
        second_cost_amount=1,
        max_uses=1,
        weight=4,
        enchantments={"soul_speed": 3},
    )


def test_enchanted_book_carries_stored_enchantments() -> None:
    offer = trade_to_offer(_book())

    assert offer.result == ItemStack("ENCHANTED_BOOK", 1, {"soul_speed": 3})
    assert offer.ingredients == (ItemStack("DIAMOND", 10), ItemStack("BOOK", 1))
    assert offer.max_uses == 1
    assert offer.uses == 0
    assert offer.price_scaling is False
    assert offer.experience_reward is False


def test_enchantments_ignored_on_items_without_storage() -> None:
    trade = Trade(
        id="rods",
        result_material="BLAZE_ROD",
        result_amount=4,
        cost_material="DIAMOND",
        cost_amount=2,
        enchantments={"mending": 1},
    )

    offer = trade_to_offer(trade)

    assert dict(offer.result.stored_enchantments) == {}
    assert offer.ingredients == (ItemStack("DIAMOND", 2),)


def test_second_cost_needs_positive_amount() -> None:
    trade = Trade(
        id="odd",
        result_material="QUARTZ",
        result_amount=8,
        cost_material="DIAMOND",
        cost_amount=1,
        second_cost_material="GOLD_INGOT",
        second_cost_amount=0,
    )

    assert len(trade_to_offer(trade).ingredients) == 1


def test_offer_list_keeps_existing_when_not_replacing() -> None:
    existing = [
        MerchantOffer(result=ItemStack("FERN", 1), ingredients=(ItemStack("EMERALD", 1),), max_uses=12),
        MerchantOffer(result=ItemStack("BLUE_ICE", 1), ingredients=(ItemStack("EMERALD", 1),), max_uses=6),
    ]

    kept = build_offer_list(existing, [_book()], replace_all=False)
    replaced = build_offer_list(existing, [_book()], replace_all=True)

    assert len(kept) == 3
    assert kept[:2] == existing
    assert len(replaced) == 1
    assert replaced[0].result.material == "ENCHANTED_BOOK"


def test_offer_requires_one_or_two_ingredients() -> None:
    with pytest.raises(ValueError):
        MerchantOffer(result=ItemStack("FERN", 1), ingredients=(), max_uses=1)
    with pytest.raises(ValueError):
        MerchantOffer(
            result=ItemStack("FERN", 1),
            ingredients=(ItemStack("A", 1), ItemStack("B", 1), ItemStack("C", 1)),
            max_uses=1,
        )
