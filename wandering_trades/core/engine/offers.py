from __future__ import annotations

from typing import Iterable, Sequence

from wandering_trades.core.data.registry import MaterialRegistry
from wandering_trades.core.models import ItemStack, MerchantOffer, Trade


def trade_to_offer(trade: Trade, materials: MaterialRegistry | None = None) -> MerchantOffer:
    materials = materials if isinstance(materials, MaterialRegistry) else MaterialRegistry()

    stored: dict[str, int] = {}
    if trade.has_enchantments and materials.stores_enchantments(trade.result_material):
        stored = dict(trade.enchantments)
    result = ItemStack(material=trade.result_material, amount=trade.result_amount, stored_enchantments=stored)

    ingredients = [ItemStack(material=trade.cost_material, amount=trade.cost_amount)]
    if trade.has_second_cost:
        ingredients.append(ItemStack(material=str(trade.second_cost_material), amount=trade.second_cost_amount))

    return MerchantOffer(
        result=result,
        ingredients=tuple(ingredients),
        max_uses=trade.max_uses,
        uses=0,
        experience_reward=False,
        price_scaling=False,
    )


def build_offer_list(
    existing: Iterable[MerchantOffer],
    trades: Sequence[Trade],
    *,
    replace_all: bool,
    materials: MaterialRegistry | None = None,
) -> list[MerchantOffer]:
    offers: list[MerchantOffer] = [] if replace_all else list(existing)
    offers.extend(trade_to_offer(trade, materials) for trade in trades)
    return offers
