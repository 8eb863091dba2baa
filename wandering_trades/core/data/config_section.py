from __future__ import annotations

from importlib import resources
import logging
from pathlib import Path
from typing import Any, Iterator, Mapping

import yaml


LOG = logging.getLogger(__name__)

_TRUE_WORDS = {"true", "yes", "on", "1"}
_FALSE_WORDS = {"false", "no", "off", "0"}
_MISSING = object()


class ConfigError(RuntimeError):
    """Configuration file missing or unreadable."""


class ConfigSection:
    """Read-only view over a nested mapping, addressed with dotted paths.

    Getters never raise on bad data: a missing or malformed value yields the
    default passed by the caller.
    """

    def __init__(self, data: Mapping[str, Any] | None = None, *, path: str = "") -> None:
        self._data: dict[str, Any] = {str(k): v for k, v in (data or {}).items()}
        self.path = path

    def __repr__(self) -> str:
        return f"ConfigSection(path={self.path!r}, keys={list(self._data)!r})"

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._data)

    def keys(self) -> list[str]:
        return list(self._data.keys())

    def _lookup(self, path: str) -> Any:
        node: Any = self._data
        for part in str(path or "").split("."):
            if not isinstance(node, Mapping):
                return _MISSING
            # YAML may load numeric keys as ints.
            if part in node:
                node = node[part]
            elif part.isdigit() and int(part) in node:
                node = node[int(part)]
            else:
                return _MISSING
        return node

    def contains(self, path: str) -> bool:
        return self._lookup(path) is not _MISSING

    def get(self, path: str, default: Any = None) -> Any:
        value = self._lookup(path)
        return default if value is _MISSING else value

    def get_section(self, path: str) -> ConfigSection | None:
        value = self._lookup(path)
        if not isinstance(value, Mapping):
            return None
        full = f"{self.path}.{path}" if self.path else path
        return ConfigSection(value, path=full)

    def get_str(self, path: str, default: str | None = None) -> str | None:
        value = self._lookup(path)
        if value is _MISSING or value is None or isinstance(value, (Mapping, list)):
            return default
        return str(value)

    def get_int(self, path: str, default: int = 0) -> int:
        value = self._lookup(path)
        if value is _MISSING or value is None or isinstance(value, bool):
            return default
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            return int(value) if value.is_integer() else default
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                return default
        return default

    def get_bool(self, path: str, default: bool = False) -> bool:
        value = self._lookup(path)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            word = value.strip().casefold()
            if word in _TRUE_WORDS:
                return True
            if word in _FALSE_WORDS:
                return False
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        return default

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)


def load_config_file(path: str | Path) -> ConfigSection:
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path.as_posix()}")
    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path.as_posix()}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {config_path.as_posix()}: {e}") from e

    if raw is None:
        return ConfigSection({})
    if not isinstance(raw, Mapping):
        raise ConfigError(f"{config_path.as_posix()}: top level must be a mapping")
    return ConfigSection(raw)


def default_config_text() -> str:
    return resources.files("wandering_trades.data").joinpath("config.yml").read_text(encoding="utf-8")


def ensure_default_config(path: str | Path) -> bool:
    """Write the bundled config.yml to ``path`` if nothing is there yet."""
    config_path = Path(path)
    if config_path.exists():
        return False
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(default_config_text(), encoding="utf-8")
    LOG.info("config: wrote default configuration to %s", config_path)
    return True
