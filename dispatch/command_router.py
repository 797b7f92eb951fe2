"""
dispatch/command_router.py
--------------------------
Resolves a command name to its handler and runs it.

Order of resolution:
    1. Dynamic distance filters: `corridas_<d1>,<d2>,...` (each `<d>` may end
       in 'km') go straight to the distance handler when at least one
       distance parses. They are never stored in the registry.
    2. Exact lookup in the CommandRegistry, initialized on first use.

The router never raises: unknown commands get a fixed "not recognized"
reply and handler failures a fixed "internal error" reply.
"""

import asyncio
import re
from typing import Awaitable, Callable, Optional

from dispatch.command_registry import CommandRegistry
from models.command import CommandInput, CommandOutput
from utils.logger import get_logger

logger = get_logger(__name__)

NOT_RECOGNIZED_TEXT = "❌ Comando não reconhecido. Use /help para ver os comandos disponíveis."
INTERNAL_ERROR_TEXT = "❌ Erro interno. Tente novamente mais tarde."

_DISTANCE_COMMAND = re.compile(r"^corridas_(.+)$")
_LEADING_INT = re.compile(r"^\s*(\d+)")

DistanceHandler = Callable[[CommandInput, list[int]], Awaitable[CommandOutput]]


def parse_distances(text: str) -> list[int]:
    """
    Parse a comma-separated distance list such as '5km,10km,21'.

    A trailing 'km' is stripped from each token; tokens that do not start
    with a number are dropped.
    """
    distances = []
    for token in text.split(","):
        match = _LEADING_INT.match(token.replace("km", ""))
        if match:
            distances.append(int(match.group(1)))
    return distances


def match_distance_command(command: str) -> list[int]:
    """Distances encoded in a `corridas_...` command, or [] if it is not one."""
    match = _DISTANCE_COMMAND.match(command)
    if not match:
        return []
    return parse_distances(match.group(1))


class CommandRouter:
    """
    Entry point for slash commands.

    Args:
        registry: Shared command registry (populated lazily on first command).
        distance_handler: Handler for the dynamic `corridas_<distances>` family.
        interceptor: Optional history hooks run before and after a handler.
    """

    def __init__(
        self,
        registry: CommandRegistry,
        distance_handler: DistanceHandler,
        interceptor=None,
    ):
        self._registry = registry
        self._distance_handler = distance_handler
        self._interceptor = interceptor
        self._initialized = False
        self._init_lock = asyncio.Lock()

    async def get_registry(self) -> CommandRegistry:
        """Return the registry, auto-registering all modules exactly once."""
        if not self._initialized:
            async with self._init_lock:
                if not self._initialized:
                    try:
                        self._registry.auto_register_commands()
                    except Exception as e:
                        logger.error(f"Failed to initialize command registry: {e}", exc_info=True)
                    self._initialized = True
        return self._registry

    async def route_command(self, command: str, command_input: CommandInput) -> CommandOutput:
        """
        Run the handler for `command`.

        Returns:
            The handler's output, or a fixed not-recognized / internal-error output.
        """
        await self._intercept_incoming(command_input)

        try:
            distances = match_distance_command(command)
            if distances:
                logger.info(f"Distance filter /{command} -> {distances}")
                output = await self._distance_handler(command_input, distances)
                await self._intercept_outgoing(command_input, output)
                return output

            registry = await self.get_registry()
            handler = registry.get_handler(command)

            if handler is None:
                logger.warning(f"Command not found: /{command} (user {command_input.user_id})")
                return CommandOutput(text=NOT_RECOGNIZED_TEXT, format="HTML")

            logger.info(f"Executing command /{command} for user {command_input.user_id}")
            output = await handler(command_input)
            await self._intercept_outgoing(command_input, output)
            return output

        except Exception as e:
            logger.error(
                f"Error executing command /{command} (user {command_input.user_id}): {e}",
                exc_info=True,
            )
            return CommandOutput(text=INTERNAL_ERROR_TEXT, format="HTML")

    async def get_available_commands(self) -> list[str]:
        """Sorted names of all registered commands, or [] on failure."""
        try:
            registry = await self.get_registry()
            return registry.get_all_commands()
        except Exception as e:
            logger.error(f"Failed to list available commands: {e}")
            return []

    # ── INTERCEPTION ──────────────────────────────────────

    async def _intercept_incoming(self, command_input: CommandInput) -> None:
        if self._interceptor is None:
            return
        try:
            await self._interceptor.intercept_incoming_message(command_input)
        except Exception as e:
            logger.error(f"Incoming message interception failed: {e}")

    async def _intercept_outgoing(self, command_input: CommandInput, output: CommandOutput) -> None:
        if self._interceptor is None or output is None:
            return
        try:
            await self._interceptor.intercept_outgoing_message(command_input, output)
        except Exception as e:
            logger.error(f"Outgoing message interception failed: {e}")
