from __future__ import annotations

from dataclasses import dataclass, field
import logging
from types import MappingProxyType
from typing import Any, Mapping, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from wandering_trades.core.models import Trade

from .config_section import ConfigSection
from .registry import EnchantmentRegistry, MaterialRegistry


LOG = logging.getLogger(__name__)

DEFAULT_COST_MATERIAL = "DIAMOND"

_ModelT = TypeVar("_ModelT", bound=BaseModel)


class TradeEntryError(ValueError):
    """A single trade entry cannot be built; the rest of the load goes on."""


class CatalogSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    min_trades: int = Field(5, ge=0)
    max_trades: int = Field(8, ge=0)
    replace_all_trades: bool = True


class TradeEntryDraft(BaseModel):
    enabled: bool = True
    result_material: str
    result_amount: int = Field(1, ge=1)
    cost_material: str = DEFAULT_COST_MATERIAL
    cost_amount: int = Field(1, ge=1)
    second_cost_material: Optional[str] = None
    second_cost_amount: int = Field(0, ge=0)
    max_uses: int = Field(3, ge=0)
    weight: int = 10
    enchantments: dict[str, int] = Field(default_factory=dict)


@dataclass(frozen=True)
class TradeCatalog:
    """Immutable snapshot of the enabled trades and the sampling settings.

    A reload builds a new catalog; nothing ever edits one in place, so a
    reader holding a reference always sees a consistent set.
    """

    trades: tuple[Trade, ...] = ()
    settings: CatalogSettings = field(default_factory=CatalogSettings)
    skipped: Mapping[str, str] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "trades", tuple(self.trades))
        object.__setattr__(self, "skipped", MappingProxyType(dict(self.skipped)))

    def __len__(self) -> int:
        return len(self.trades)

    def get_all_trades(self) -> list[Trade]:
        return list(self.trades)

    def get_min_trades(self) -> int:
        return self.settings.min_trades

    def get_max_trades(self) -> int:
        return self.settings.max_trades

    def is_replace_all_trades(self) -> bool:
        return self.settings.replace_all_trades

    def find(self, trade_id: str) -> Trade | None:
        for trade in self.trades:
            if trade.id == trade_id:
                return trade
        return None


def _validate_with_fallback(model_cls: type[_ModelT], payload: dict[str, Any], *, label: str) -> _ModelT:
    try:
        return model_cls.model_validate(payload)
    except ValidationError as exc:
        bad = {str(err["loc"][0]) for err in exc.errors() if err.get("loc")}
        cleaned = {k: v for k, v in payload.items() if k not in bad}
        defaults = model_cls.model_validate(cleaned)
        for name in sorted(bad):
            LOG.warning(
                "trade_catalog: %s has invalid %s=%r, using default %r",
                label,
                name,
                payload.get(name),
                getattr(defaults, name, None),
            )
        return defaults


def _load_settings(config: ConfigSection) -> CatalogSettings:
    defaults = CatalogSettings()
    payload = {
        "min_trades": config.get_int("settings.min-trades", defaults.min_trades),
        "max_trades": config.get_int("settings.max-trades", defaults.max_trades),
        "replace_all_trades": config.get_bool("settings.replace-all-trades", defaults.replace_all_trades),
    }
    settings = _validate_with_fallback(CatalogSettings, payload, label="settings")
    if settings.max_trades < settings.min_trades:
        LOG.warning(
            "trade_catalog: max-trades (%s) is lower than min-trades (%s)",
            settings.max_trades,
            settings.min_trades,
        )
    return settings


def _load_enchantments(
    trade_id: str,
    section: ConfigSection | None,
    registry: EnchantmentRegistry,
) -> dict[str, int]:
    out: dict[str, int] = {}
    if section is None:
        return out
    for key in section.keys():
        enchantment = registry.get(key)
        if enchantment is None:
            LOG.warning("trade_catalog: trade '%s' has invalid enchantment: %s", trade_id, key)
            continue
        out[enchantment] = section.get_int(key, 1)
    return out


def load_trade(
    trade_id: str,
    section: ConfigSection,
    *,
    materials: MaterialRegistry,
    enchantments: EnchantmentRegistry,
) -> Trade:
    """Build one Trade from its config section or raise TradeEntryError."""
    result_raw = section.get_str("result.material")
    if result_raw is None:
        raise TradeEntryError("missing result material")
    result_material = materials.match(result_raw)
    if result_material is None:
        raise TradeEntryError(f"invalid result material: {result_raw}")

    cost_raw = section.get_str("cost.material", DEFAULT_COST_MATERIAL)
    cost_material = materials.match(cost_raw)
    if cost_material is None:
        raise TradeEntryError(f"invalid cost material: {cost_raw}")

    second_material: str | None = None
    second_amount = 0
    if section.contains("second-cost"):
        second_raw = section.get_str("second-cost.material")
        matched = materials.match(second_raw)
        if matched is not None:
            second_amount = section.get_int("second-cost.amount", 1)
            if second_amount > 0:
                second_material = matched
            else:
                second_amount = 0
        elif second_raw is not None:
            LOG.debug("trade_catalog: trade '%s' ignores unknown second cost %s", trade_id, second_raw)

    payload = {
        "enabled": section.get_bool("enabled", True),
        "result_material": result_material,
        "result_amount": section.get_int("result.amount", 1),
        "cost_material": cost_material,
        "cost_amount": section.get_int("cost.amount", 1),
        "second_cost_material": second_material,
        "second_cost_amount": second_amount,
        "max_uses": section.get_int("max-uses", 3),
        "weight": section.get_int("weight", 10),
        "enchantments": _load_enchantments(trade_id, section.get_section("enchantments"), enchantments),
    }
    draft = _validate_with_fallback(TradeEntryDraft, payload, label=f"trade '{trade_id}'")

    return Trade(
        id=trade_id,
        result_material=draft.result_material,
        result_amount=draft.result_amount,
        cost_material=draft.cost_material,
        cost_amount=draft.cost_amount,
        second_cost_material=draft.second_cost_material,
        second_cost_amount=draft.second_cost_amount,
        max_uses=draft.max_uses,
        weight=draft.weight,
        enabled=draft.enabled,
        enchantments=draft.enchantments,
    )


def load_trade_catalog(
    config: ConfigSection,
    *,
    materials: MaterialRegistry | None = None,
    enchantments: EnchantmentRegistry | None = None,
) -> TradeCatalog:
    materials = materials if isinstance(materials, MaterialRegistry) else MaterialRegistry()
    enchantments = enchantments if isinstance(enchantments, EnchantmentRegistry) else EnchantmentRegistry()
    settings = _load_settings(config)

    trades_section = config.get_section("trades")
    if trades_section is None:
        LOG.warning("trade_catalog: no trades section found in config")
        return TradeCatalog(trades=(), settings=settings)

    trades: list[Trade] = []
    skipped: dict[str, str] = {}
    for trade_id in trades_section.keys():
        section = trades_section.get_section(trade_id)
        if section is None:
            skipped[trade_id] = "not a section"
            continue
        try:
            trade = load_trade(trade_id, section, materials=materials, enchantments=enchantments)
        except TradeEntryError as exc:
            LOG.warning("trade_catalog: trade '%s' skipped (%s)", trade_id, exc)
            skipped[trade_id] = str(exc)
            continue
        except Exception as exc:
            LOG.warning("trade_catalog: failed to load trade '%s': %s", trade_id, exc)
            skipped[trade_id] = str(exc) or type(exc).__name__
            continue

        if not trade.enabled:
            LOG.debug("trade_catalog: trade '%s' is disabled", trade_id)
            continue
        trades.append(trade)
        LOG.debug("trade_catalog: loaded %s", trade.describe())

    LOG.info("trade_catalog: loaded %s custom trades (%s skipped)", len(trades), len(skipped))
    return TradeCatalog(trades=tuple(trades), settings=settings, skipped=skipped)
