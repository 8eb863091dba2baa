from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path

from dotenv import load_dotenv


# Charge un .env a la racine du projet sans ecraser le shell.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(PROJECT_ROOT / ".env", override=False)

DEFAULT_CONFIG_PATH = "plugins/WanderingTrader/config.yml"
DEFAULT_TARGET_TYPE = "WANDERING_TRADER"
DEFAULT_CLEANUP_TICKS = 100


def _env_str(name: str, default: str) -> str:
    return str(os.getenv(name, default) or default).strip() or default


def _env_int(name: str, default: int) -> int:
    raw = str(os.getenv(name, str(default)) or str(default)).strip()
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class PluginSettings:
    config_path: str = DEFAULT_CONFIG_PATH
    log_level: str = "INFO"
    target_type: str = DEFAULT_TARGET_TYPE
    cleanup_ticks: int = DEFAULT_CLEANUP_TICKS


def load_settings() -> PluginSettings:
    return PluginSettings(
        config_path=_env_str("WANDERING_TRADES_CONFIG", DEFAULT_CONFIG_PATH),
        log_level=_env_str("WANDERING_TRADES_LOG_LEVEL", "INFO").upper(),
        target_type=_env_str("WANDERING_TRADES_TARGET_TYPE", DEFAULT_TARGET_TYPE).upper(),
        cleanup_ticks=max(1, _env_int("WANDERING_TRADES_CLEANUP_TICKS", DEFAULT_CLEANUP_TICKS)),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level or "INFO").upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
