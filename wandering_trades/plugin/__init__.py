from .commands import ADMIN_PERMISSION, ConsoleSender, handle_command, tab_complete
from .runtime import TradePlugin, build_plugin

__all__ = [
    "ADMIN_PERMISSION",
    "ConsoleSender",
    "TradePlugin",
    "build_plugin",
    "handle_command",
    "tab_complete",
]
