from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Sequence

from wandering_trades.core.data import ConfigError

from .runtime import TradePlugin


ADMIN_PERMISSION = "wanderingtrader.admin"
SUBCOMMANDS = ("reload", "list", "info")


class CommandSender(Protocol):
    def has_permission(self, permission: str) -> bool: ...


@dataclass
class ConsoleSender:
    permissions: set[str] = field(default_factory=lambda: {ADMIN_PERMISSION})

    def has_permission(self, permission: str) -> bool:
        return permission in self.permissions


def _format_material(material: str) -> str:
    return str(material or "").casefold().replace("_", " ")


def help_lines() -> list[str]:
    return [
        "=== WanderingTrader Commands ===",
        "/wanderingtrader reload - Reload configuration",
        "/wanderingtrader list - List all configured trades",
        "/wanderingtrader info - Show plugin info",
    ]


def handle_command(plugin: TradePlugin, sender: CommandSender, args: Sequence[str]) -> list[str]:
    """
    Execute /wanderingtrader <sub> and return the lines to send back.
    """
    if not sender.has_permission(ADMIN_PERMISSION):
        return ["You don't have permission to use this command."]
    if not args:
        return help_lines()

    sub = str(args[0]).strip().casefold()
    if sub == "reload":
        try:
            catalog = plugin.reload()
        except ConfigError as exc:
            return [f"Reload failed: {exc}"]
        return ["WanderingTrader configuration reloaded!", f"Loaded {len(catalog)} trades."]

    if sub == "list":
        trades = plugin.catalog.get_all_trades()
        lines = ["=== WanderingTrader Trades ==="]
        if not trades:
            lines.append("No trades configured!")
            return lines
        for trade in trades:
            lines.append(
                f"- {trade.id}: {trade.result_amount}x {_format_material(trade.result_material)} "
                f"for {trade.cost_amount}x {_format_material(trade.cost_material)} (weight: {trade.weight})"
            )
        return lines

    if sub == "info":
        catalog = plugin.catalog
        return [
            "=== WanderingTrader Info ===",
            f"Min trades per trader: {catalog.get_min_trades()}",
            f"Max trades per trader: {catalog.get_max_trades()}",
            f"Replace all vanilla trades: {str(catalog.is_replace_all_trades()).lower()}",
            f"Total configured trades: {len(catalog)}",
        ]

    return help_lines()


def tab_complete(sender: CommandSender, args: Sequence[str]) -> list[str]:
    if not sender.has_permission(ADMIN_PERMISSION):
        return []
    if len(args) == 1:
        prefix = str(args[0]).casefold()
        return [name for name in SUBCOMMANDS if name.startswith(prefix)]
    return []
