from __future__ import annotations

import re
from typing import Iterable


NAMESPACE = "minecraft"

DEFAULT_MATERIALS = (
    "DIAMOND",
    "EMERALD",
    "GOLD_INGOT",
    "IRON_INGOT",
    "NETHERITE_INGOT",
    "NETHERITE_SCRAP",
    "ANCIENT_DEBRIS",
    "BLAZE_ROD",
    "BLAZE_POWDER",
    "GHAST_TEAR",
    "MAGMA_CREAM",
    "NETHER_WART",
    "NETHER_STAR",
    "NETHERRACK",
    "NETHER_BRICKS",
    "NETHER_QUARTZ_ORE",
    "QUARTZ",
    "QUARTZ_BLOCK",
    "GLOWSTONE",
    "GLOWSTONE_DUST",
    "SOUL_SAND",
    "SOUL_SOIL",
    "SOUL_LANTERN",
    "SOUL_TORCH",
    "BASALT",
    "BLACKSTONE",
    "GILDED_BLACKSTONE",
    "CRIMSON_STEM",
    "WARPED_STEM",
    "CRIMSON_FUNGUS",
    "WARPED_FUNGUS",
    "CRIMSON_NYLIUM",
    "WARPED_NYLIUM",
    "SHROOMLIGHT",
    "WEEPING_VINES",
    "TWISTING_VINES",
    "CRYING_OBSIDIAN",
    "OBSIDIAN",
    "RESPAWN_ANCHOR",
    "LODESTONE",
    "WITHER_SKELETON_SKULL",
    "WITHER_ROSE",
    "PIGLIN_HEAD",
    "STRIDER_SPAWN_EGG",
    "WARPED_FUNGUS_ON_A_STICK",
    "ENCHANTED_BOOK",
    "BOOK",
    "EXPERIENCE_BOTTLE",
    "ENDER_PEARL",
    "GOLDEN_APPLE",
    "ENCHANTED_GOLDEN_APPLE",
    "TOTEM_OF_UNDYING",
    "NAME_TAG",
    "SADDLE",
    "MUSIC_DISC_PIGSTEP",
    "SNOUT_ARMOR_TRIM_SMITHING_TEMPLATE",
    "RIB_ARMOR_TRIM_SMITHING_TEMPLATE",
    "NETHERITE_UPGRADE_SMITHING_TEMPLATE",
)

DEFAULT_ENCHANTMENTS = (
    "aqua_affinity",
    "bane_of_arthropods",
    "binding_curse",
    "blast_protection",
    "channeling",
    "depth_strider",
    "efficiency",
    "feather_falling",
    "fire_aspect",
    "fire_protection",
    "flame",
    "fortune",
    "frost_walker",
    "impaling",
    "infinity",
    "knockback",
    "looting",
    "loyalty",
    "luck_of_the_sea",
    "lure",
    "mending",
    "multishot",
    "piercing",
    "power",
    "projectile_protection",
    "protection",
    "punch",
    "quick_charge",
    "respiration",
    "riptide",
    "sharpness",
    "silk_touch",
    "smite",
    "soul_speed",
    "sweeping_edge",
    "swift_sneak",
    "thorns",
    "unbreaking",
    "vanishing_curse",
)

_STORES_ENCHANTMENTS = frozenset({"ENCHANTED_BOOK"})


def _strip_namespace(raw: str) -> str:
    text = str(raw or "").strip()
    if ":" in text:
        namespace, _, rest = text.partition(":")
        if namespace.strip().casefold() != NAMESPACE:
            return ""
        text = rest
    return text.strip()


class MaterialRegistry:
    def __init__(self, materials: Iterable[str] = DEFAULT_MATERIALS) -> None:
        self._known = frozenset(self._normalize(m) for m in materials if self._normalize(m))

    @staticmethod
    def _normalize(raw: str) -> str:
        text = _strip_namespace(raw)
        return re.sub(r"[\s\-]+", "_", text).upper()

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.match(name) is not None

    def __len__(self) -> int:
        return len(self._known)

    def match(self, name: str | None) -> str | None:
        if name is None:
            return None
        key = self._normalize(name)
        return key if key in self._known else None

    def stores_enchantments(self, material: str) -> bool:
        return self._normalize(material) in _STORES_ENCHANTMENTS


class EnchantmentRegistry:
    def __init__(self, enchantments: Iterable[str] = DEFAULT_ENCHANTMENTS) -> None:
        self._known = frozenset(self._normalize(e) for e in enchantments if self._normalize(e))

    @staticmethod
    def _normalize(raw: str) -> str:
        return _strip_namespace(raw).casefold()

    def __len__(self) -> int:
        return len(self._known)

    def get(self, key: str | None) -> str | None:
        if key is None:
            return None
        name = self._normalize(key)
        return name if name in self._known else None
