from __future__ import annotations

from pathlib import Path

from wandering_trades.host import TickScheduler
from wandering_trades.plugin import ConsoleSender, TradePlugin, handle_command, tab_complete
from wandering_trades.settings import PluginSettings


_CONFIG = """
settings:
  min-trades: 1
  max-trades: 3
  replace-all-trades: false
trades:
  rods:
    result:
      material: BLAZE_ROD
      amount: 4
    cost:
      material: DIAMOND
      amount: 2
    weight: 12
"""


def _plugin(tmp_path: Path) -> TradePlugin:
    path = tmp_path / "config.yml"
    path.write_text(_CONFIG, encoding="utf-8")
    plugin = TradePlugin(path, TickScheduler(), settings=PluginSettings())
    plugin.enable()
    return plugin


def test_commands_require_permission(tmp_path: Path) -> None:
    plugin = _plugin(tmp_path)
    guest = ConsoleSender(permissions=set())

    assert handle_command(plugin, guest, ["info"]) == ["You don't have permission to use this command."]
    assert tab_complete(guest, ["re"]) == []


def test_help_on_missing_or_unknown_subcommand(tmp_path: Path) -> None:
    plugin = _plugin(tmp_path)

    assert handle_command(plugin, ConsoleSender(), [])[0] == "=== WanderingTrader Commands ==="
    assert handle_command(plugin, ConsoleSender(), ["dance"])[0] == "=== WanderingTrader Commands ==="


def test_list_and_info(tmp_path: Path) -> None:
    plugin = _plugin(tmp_path)

    listing = handle_command(plugin, ConsoleSender(), ["LIST"])
    assert listing == [
        "=== WanderingTrader Trades ===",
        "- rods: 4x blaze rod for 2x diamond (weight: 12)",
    ]

    info = handle_command(plugin, ConsoleSender(), ["info"])
    assert "Min trades per trader: 1" in info
    assert "Max trades per trader: 3" in info
    assert "Replace all vanilla trades: false" in info
    assert "Total configured trades: 1" in info


def test_reload_reports_count_and_failures(tmp_path: Path) -> None:
    plugin = _plugin(tmp_path)

    assert handle_command(plugin, ConsoleSender(), ["reload"])[-1] == "Loaded 1 trades."

    (tmp_path / "config.yml").write_text("trades: {}\n", encoding="utf-8")
    handle_command(plugin, ConsoleSender(), ["reload"])
    assert handle_command(plugin, ConsoleSender(), ["list"])[-1] == "No trades configured!"

    (tmp_path / "config.yml").unlink()
    lines = handle_command(plugin, ConsoleSender(), ["reload"])
    assert lines[0].startswith("Reload failed:")


def test_tab_complete_filters_by_prefix() -> None:
    sender = ConsoleSender()

    assert tab_complete(sender, [""]) == ["reload", "list", "info"]
    assert tab_complete(sender, ["R"]) == ["reload"]
    assert tab_complete(sender, ["li"]) == ["list"]
    assert tab_complete(sender, ["list", "x"]) == []
