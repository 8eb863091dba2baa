from .config_section import ConfigError, ConfigSection, ensure_default_config, load_config_file
from .registry import EnchantmentRegistry, MaterialRegistry
from .trade_catalog import (
    CatalogSettings,
    TradeCatalog,
    TradeEntryDraft,
    TradeEntryError,
    load_trade,
    load_trade_catalog,
)

__all__ = [
    "CatalogSettings",
    "ConfigError",
    "ConfigSection",
    "EnchantmentRegistry",
    "MaterialRegistry",
    "TradeCatalog",
    "TradeEntryDraft",
    "TradeEntryError",
    "ensure_default_config",
    "load_config_file",
    "load_trade",
    "load_trade_catalog",
]
