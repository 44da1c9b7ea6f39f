from abc import ABC, abstractmethod
from typing import Optional

from telegram.ext import CallbackContext

from models.models import UserProfile


class ProfileStateProviding(ABC):

    @abstractmethod
    async def get(self, context: CallbackContext) -> Optional[UserProfile]:
        """Return the profile stored for this conversation, or None when nothing has been stored yet."""
        pass

    @abstractmethod
    async def set(self, context: CallbackContext, profile: UserProfile):
        """Store the profile for this conversation, replacing any previous value."""
        pass


class UserDataProfileStateProvider(ProfileStateProviding):
    """
    Keeps the profile in PTB's per-user `context.user_data`.

    When the application is built with a persistence backend, the user data
    (and therefore the profile) survives bot restarts.
    """

    def __init__(self, key: str = "user_profile"):
        self.key = key

    async def get(self, context: CallbackContext) -> Optional[UserProfile]:
        return context.user_data.get(self.key)

    async def set(self, context: CallbackContext, profile: UserProfile):
        context.user_data[self.key] = profile
