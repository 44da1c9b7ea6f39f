from typing import Optional

from bots.bot_core import BotCore
from command_handlers.start_handler import StartHandler
from command_handlers.conversations.greeting_conversation import GreetingConversation
from models.models import UserProfile
from providers.profile_state_provider import ProfileStateProviding, UserDataProfileStateProvider

import logging

logger = logging.getLogger(__name__)

PROFILE_DIALOG = "profileDialog"

class ProfileBot:
    """
    Bot that collects a short user profile through a guided conversation.
    
    This bot is responsible for:
    1. Setting up the /start command handler
    2. Setting up the profile conversation handler
    3. Managing the bot lifecycle
    """
    
    def __init__(
        self,
        token: str,
        persistence_path: Optional[str] = None,
        profile_command: str = "profile",
        profile_accessor: Optional[ProfileStateProviding] = None,
        default_profile: Optional[UserProfile] = None,
    ):
        """
        Initialize the profile bot.
        
        Args:
            token: Telegram bot token
            persistence_path: Pickle file for user data, None keeps everything in memory
            profile_command: Command that starts the profile conversation
            profile_accessor: Store for user profiles, defaults to PTB user data
            default_profile: Values used to seed a brand new profile
        """
        logger.info("Initializing profile bot...")
        self.core = BotCore(token=token, persistence_path=persistence_path, profile_command=profile_command)
        self.greeting_conversation = GreetingConversation(
            dialog_id=PROFILE_DIALOG,
            profile_accessor=profile_accessor or UserDataProfileStateProvider(),
            default_profile=default_profile,
            command=profile_command,
            persistent=self.core.is_persistent,
        )
        self._setup_command_handlers()
        logger.info("Profile bot initialized")
    
    def _setup_command_handlers(self):
        """Setup handlers specific to the profile bot."""
        logger.info("Setting up command handlers...")
        self.core.application.add_handler(StartHandler.get_handler(self.greeting_conversation.command))
        self.core.application.add_handler(self.greeting_conversation.conversation_handler)
        logger.info("Command handlers set up")

    def run(self):
        """Run the bot"""
        logger.info("Starting profile bot...")
        self.core.run()
    
    def stop(self):
        """Stop the bot"""
        logger.info("Stopping profile bot...")
        self.core.stop()
