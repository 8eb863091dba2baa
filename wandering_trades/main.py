from __future__ import annotations

import argparse
import random

from wandering_trades.core.events import EntitySpawned
from wandering_trades.core.engine import WeightedSampler
from wandering_trades.core.models import ItemStack, MerchantOffer
from wandering_trades.host import SimulatedTrader, TickScheduler
from wandering_trades.plugin import ConsoleSender, build_plugin, handle_command
from wandering_trades.settings import configure_logging, load_settings


def _vanilla_offers() -> list[MerchantOffer]:
    return [
        MerchantOffer(result=ItemStack("BLUE_ICE", 1), ingredients=(ItemStack("EMERALD", 1),), max_uses=6),
        MerchantOffer(result=ItemStack("FERN", 1), ingredients=(ItemStack("EMERALD", 1),), max_uses=12),
    ]


def _format_offer(offer: MerchantOffer) -> str:
    cost = " + ".join(f"{row.amount}x {row.material}" for row in offer.ingredients)
    text = f"{offer.result.amount}x {offer.result.material} <- {cost} (max uses {offer.max_uses})"
    if offer.result.stored_enchantments:
        enchants = ", ".join(f"{k} {v}" for k, v in sorted(offer.result.stored_enchantments.items()))
        text += f" [{enchants}]"
    return text


def simulate(args: argparse.Namespace) -> None:
    scheduler = TickScheduler()
    sampler = WeightedSampler(random.Random(args.seed))
    plugin = build_plugin(scheduler, config_path=args.config, sampler=sampler)

    traders = [SimulatedTrader(recipes=_vanilla_offers()) for _ in range(max(0, args.spawns))]
    for trader in traders:
        # Le serveur peut signaler deux fois le meme spawn.
        plugin.event_bus.publish(EntitySpawned(trader))
        plugin.event_bus.publish(EntitySpawned(trader))
    scheduler.tick(max(1, args.ticks))

    for idx, trader in enumerate(traders, start=1):
        print(f"Trader #{idx} ({trader.unique_id}) - {len(trader.recipes)} offers")
        for offer in trader.recipes:
            print(f"  {_format_offer(offer)}")
    plugin.disable()


def main() -> None:
    settings = load_settings()
    parser = argparse.ArgumentParser(description="Custom wandering trader trades")
    parser.add_argument("--config", default=settings.config_path, help="Path to config.yml")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level (default: INFO)")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("info", help="Show sampling settings")
    sub.add_parser("list", help="List configured trades")
    sim = sub.add_parser("simulate", help="Spawn traders on an in-process host")
    sim.add_argument("--spawns", type=int, default=3, help="Number of traders to spawn")
    sim.add_argument("--seed", type=int, default=None, help="RNG seed for reproducible draws")
    sim.add_argument("--ticks", type=int, default=120, help="Game ticks to run after spawning")
    args = parser.parse_args()

    configure_logging(args.log_level)
    if args.command == "simulate":
        simulate(args)
        return

    plugin = build_plugin(TickScheduler(), config_path=args.config)
    for line in handle_command(plugin, ConsoleSender(), [args.command]):
        print(line)


if __name__ == "__main__":
    main()
