import asyncio
import inspect
from unittest.mock import AsyncMock, MagicMock

import pytest
from telegram import Message, Update, User as TgUser
from telegram.ext import CallbackContext


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test to run inside a simple asyncio event loop"
    )


@pytest.hookimpl
def pytest_pyfunc_call(pyfuncitem):
    if inspect.iscoroutinefunction(pyfuncitem.obj):
        marker = pyfuncitem.get_closest_marker("asyncio")
        if marker is not None:
            testargs = {
                arg: pyfuncitem.funcargs[arg]
                for arg in pyfuncitem._fixtureinfo.argnames
            }
            loop = asyncio.new_event_loop()
            try:
                asyncio.set_event_loop(loop)
                loop.run_until_complete(pyfuncitem.obj(**testargs))
            finally:
                asyncio.set_event_loop(None)
                loop.close()
            return True


@pytest.fixture
def make_update():
    """Build a text-message update from a Telegram user with the given language."""

    def _make(text=None, user_id=1, language_code="en") -> MagicMock:
        update = MagicMock(spec=Update)
        update.effective_user = MagicMock(spec=TgUser, id=user_id, username="tester", language_code=language_code)
        update.message = AsyncMock(spec=Message)
        update.message.text = text
        return update

    return _make


@pytest.fixture
def make_context():
    """Build a callback context whose user data optionally already holds a profile."""

    def _make(profile=None, key="user_profile") -> MagicMock:
        context = MagicMock(spec=CallbackContext)
        context.user_data = {}
        if profile is not None:
            context.user_data[key] = profile
        return context

    return _make
