"""
handlers/ - Presentation Layer
==============================
Command functions and callback handler classes, grouped by feature module.
Each handler receives a platform-neutral CommandInput, delegates to the
appropriate Service and returns a CommandOutput. No business logic lives here.

COMMAND_MODULES and CALLBACK_MODULES map a module name to a loader that
imports the module on demand and returns its commands / handlers. The
registries call them once, on first use.
"""


def _race_commands() -> dict:
    from handlers.race_handler import get_commands
    return get_commands()


def _user_commands() -> dict:
    from handlers.user_handler import get_commands
    return get_commands()


def _race_callbacks() -> list:
    from handlers.race_callbacks import get_handlers
    return get_handlers()


def _user_callbacks() -> list:
    from handlers.user_callbacks import get_handlers
    return get_handlers()


def _shared_callbacks() -> list:
    from handlers.shared_callbacks import get_handlers
    return get_handlers()


COMMAND_MODULES = {
    "races": _race_commands,
    "user": _user_commands,
}

CALLBACK_MODULES = {
    "races": _race_callbacks,
    "user": _user_callbacks,
    "shared": _shared_callbacks,
}
