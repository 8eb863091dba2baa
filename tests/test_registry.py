from wandering_trades.core.data import EnchantmentRegistry, MaterialRegistry


def test_material_matching_is_lenient() -> None:
    registry = MaterialRegistry()

    assert registry.match("blaze_rod") == "BLAZE_ROD"
    assert registry.match("minecraft:ghast_tear") == "GHAST_TEAR"
    assert registry.match(" nether wart ") == "NETHER_WART"
    assert registry.match("gold-ingot") == "GOLD_INGOT"
    assert registry.match("othermod:blaze_rod") is None
    assert registry.match("") is None
    assert registry.match(None) is None
    assert "DIAMOND" in registry


def test_custom_material_vocabulary() -> None:
    registry = MaterialRegistry(["ruby", "sapphire"])

    assert len(registry) == 2
    assert registry.match("RUBY") == "RUBY"
    assert registry.match("DIAMOND") is None


def test_only_books_store_enchantments() -> None:
    registry = MaterialRegistry()

    assert registry.stores_enchantments("ENCHANTED_BOOK")
    assert registry.stores_enchantments("minecraft:enchanted_book")
    assert not registry.stores_enchantments("DIAMOND_SWORD")


def test_enchantment_lookup() -> None:
    registry = EnchantmentRegistry()

    assert registry.get("MENDING") == "mending"
    assert registry.get("minecraft:soul_speed") == "soul_speed"
    assert registry.get("speed") is None
    assert registry.get(None) is None
