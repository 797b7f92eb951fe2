"""
dispatch/command_registry.py
----------------------------
Registry mapping command names to async handler functions.

Commands are grouped by feature module ('races', 'user', ...). Each module
is wired in through a loader: a zero-argument callable returning that
module's `{command_name: handler}` dict. Registration is idempotent at both
levels: a module is merged at most once, and a command name that is
already taken is skipped with a warning rather than overwritten.
"""

from typing import Awaitable, Callable, Optional

from models.command import CommandOutput
from utils.logger import get_logger

logger = get_logger(__name__)

CommandHandler = Callable[..., Awaitable[CommandOutput]]
CommandModuleLoader = Callable[[], dict[str, CommandHandler]]


class CommandRegistry:
    """
    Holds the command → handler map for one bot process.

    Usage:
        registry = CommandRegistry({"races": races_loader, "user": user_loader})
        registry.auto_register_commands()
        handler = registry.get_handler("corridas")
    """

    def __init__(self, modules: Optional[dict[str, CommandModuleLoader]] = None):
        self._modules: dict[str, CommandModuleLoader] = dict(modules or {})
        self._commands: dict[str, CommandHandler] = {}
        self._registered_modules: set[str] = set()

    # ── REGISTRATION ──────────────────────────────────────

    def auto_register_commands(self) -> None:
        """
        Register every known module that is not registered yet.
        A module whose loader fails is logged and skipped; the rest still register.
        """
        logger.info("Registering commands...")
        for module_name in self._modules:
            self._register_from_module(module_name)
        logger.info(f"Total of {len(self._commands)} commands registered.")

    def _register_from_module(self, module_name: str) -> None:
        if module_name in self._registered_modules:
            logger.info(f"Command module '{module_name}' already registered.")
            return

        try:
            commands = self._modules[module_name]()
        except Exception as e:
            logger.error(f"Failed to load commands from module '{module_name}': {e}", exc_info=True)
            return

        self.register_module(module_name, commands)

    def register_module(self, module_name: str, commands: dict[str, CommandHandler]) -> None:
        """
        Merge a module's commands into the registry.

        Args:
            module_name: Logical feature name used for idempotency and logs.
            commands: Mapping of command name to async handler.
        """
        if module_name in self._registered_modules:
            logger.info(f"Command module '{module_name}' already registered.")
            return

        for command_name, handler in commands.items():
            if command_name in self._commands:
                logger.warning(f"Command /{command_name} already registered, skipping [{module_name}].")
                continue
            self._commands[command_name] = handler
            logger.debug(f"[{module_name}] Command registered: /{command_name}")

        self._registered_modules.add(module_name)

    # ── LOOKUP ────────────────────────────────────────────

    def get_handler(self, command: str) -> Optional[CommandHandler]:
        """Exact, case-sensitive lookup. Returns None if unknown."""
        return self._commands.get(command)

    def get_all_commands(self) -> list[str]:
        """Sorted list of registered command names."""
        return sorted(self._commands)

    def has_command(self, command: str) -> bool:
        return command in self._commands

    def registered_modules(self) -> list[str]:
        return sorted(self._registered_modules)

    def __len__(self) -> int:
        return len(self._commands)

    # ── RESET ─────────────────────────────────────────────

    def clear_registry(self) -> None:
        """Forget all commands and modules. Test isolation only."""
        self._commands.clear()
        self._registered_modules.clear()
        logger.info("Command registry cleared.")
