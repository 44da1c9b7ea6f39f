from abc import ABC, abstractmethod
from telegram.ext import ConversationHandler

class ConversationFlow(ABC):
    """
    Abstract base class for all conversation flows in the Telegram bot.

    Each conversation flow represents one interaction sequence with the user,
    such as collecting a user profile step by step.
    """

    @property
    @abstractmethod
    def conversation_handler(self) -> ConversationHandler:
        """
        The conversation handler for this conversation flow.

        This property should define the entry points, states, and fallbacks
        for the conversation flow. It is a characteristic of the conversation
        flow rather than a method that takes arguments.

        Returns:
            ConversationHandler: The conversation handler instance that manages
                               the flow of conversation with the user
        """
        pass
