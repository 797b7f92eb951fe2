# tests/conftest.py
import pytest

from models.command import CommandInput, UserIdentity


@pytest.fixture
def command_input():
    """Factory for CommandInput objects sent by a Telegram user."""
    def _make(*args, user_id=42, name="Ana", **kwargs):
        return CommandInput(
            user=UserIdentity(id=user_id, name=name),
            args=tuple(args),
            platform="telegram",
            **kwargs,
        )
    return _make
