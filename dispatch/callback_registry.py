"""
dispatch/callback_registry.py
-----------------------------
Registers callback handler objects with a CallbackManager, grouped by
feature module. Same idempotency rules as the command registry, keyed on
each handler's name instead of a command string.
"""

from typing import Callable, Optional

from dispatch.callback_manager import CallbackHandler, CallbackManager
from utils.logger import get_logger

logger = get_logger(__name__)

CallbackModuleLoader = Callable[[], list[CallbackHandler]]


class CallbackRegistry:
    """
    Feeds handlers from each module's loader into the manager, once.

    Registration order is preserved: modules in the order they were given,
    handlers in the order each loader returns them.
    """

    def __init__(
        self,
        manager: CallbackManager,
        modules: Optional[dict[str, CallbackModuleLoader]] = None,
    ):
        self._manager = manager
        self._modules: dict[str, CallbackModuleLoader] = dict(modules or {})
        self._registered_handlers: list[str] = []
        self._registered_modules: set[str] = set()

    def auto_register_handlers(self) -> None:
        """Register every known module; a failing module does not stop the others."""
        for module_name in self._modules:
            self._register_from_module(module_name)
        logger.info(f"Total of {len(self._registered_handlers)} callback handlers registered.")

    def _register_from_module(self, module_name: str) -> None:
        if module_name in self._registered_modules:
            logger.info(f"Callback module '{module_name}' already registered.")
            return

        try:
            handlers = self._modules[module_name]()
        except Exception as e:
            logger.error(f"Failed to load callback handlers from module '{module_name}': {e}", exc_info=True)
            return

        self.register_handlers(handlers, module_name)
        self._registered_modules.add(module_name)

    def register_handlers(self, handlers: list[CallbackHandler], module_name: str) -> None:
        """Register handlers not seen before; duplicates are skipped and logged."""
        for handler in handlers:
            if handler.name in self._registered_handlers:
                logger.warning(f"Callback handler {handler.name} already registered, skipping [{module_name}].")
                continue
            self._manager.register_handler(handler)
            self._registered_handlers.append(handler.name)
            logger.debug(f"[{module_name}] Callback handler registered: {handler.name}")

    def get_registered_handlers(self) -> list[str]:
        """Handler names in registration order."""
        return list(self._registered_handlers)

    def clear_registry(self) -> None:
        """Drop every registration, including the manager's handlers. Test isolation only."""
        self._manager.clear()
        self._registered_handlers.clear()
        self._registered_modules.clear()
        logger.info("Callback registry cleared.")
