from .trade import ItemStack, MerchantOffer, Trade

__all__ = [
    "ItemStack",
    "MerchantOffer",
    "Trade",
]
