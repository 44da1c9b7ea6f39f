from typing import Optional

from telegram import BotCommand, Update
from telegram.ext import Application, ContextTypes, PicklePersistence
import logging

from localization import Key, store

logger = logging.getLogger(__name__)

class BotCore:
    """
    Core bot implementation with common functionality.
    
    This class handles:
    1. Bot initialization (with optional pickle persistence for user data)
    2. Application setup
    3. Error reporting for unhandled handler exceptions
    """
    
    def __init__(self, token: str, persistence_path: Optional[str] = None, profile_command: str = "profile"):
        """
        Initialize the bot core.
        
        Args:
            token: Telegram bot token
            persistence_path: File used to persist user and conversation data between restarts
            profile_command: Command that starts the profile conversation
        """
        logger.info("Initializing bot core...")
        logger.info(f"Available locales: {', '.join(store.available_locales())} (default '{store.default_locale}')")
        self.profile_command = profile_command
        builder = Application.builder().token(token)
        if persistence_path:
            logger.info(f"Persisting bot data to {persistence_path}")
            builder.persistence(PicklePersistence(filepath=persistence_path))
        builder.post_init(self._register_bot_commands)
        self.application = builder.build()
        self.application.add_error_handler(self.on_error)
        logger.info("Bot core initialized")

    @property
    def is_persistent(self) -> bool:
        return self.application.persistence is not None
    
    def run(self):
        """Run the bot"""
        logger.info("Starting bot...")
        self.application.run_polling()

    def stop(self):
        """Stop the bot"""
        logger.info("Stopping bot...")
        self.application.stop()

    @staticmethod
    async def on_error(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Log unhandled handler errors and let the user know the last message was not processed."""
        logger.error("Unhandled error while processing update", exc_info=context.error)

        if isinstance(update, Update) and update.effective_message:
            language_code = update.effective_user.language_code if update.effective_user else None
            await update.effective_message.reply_text(Key.for_language_code(language_code).error_generic)

    async def _register_bot_commands(self, application: Application):
        """Register bot commands once the application is ready."""

        bot_commands = [
            BotCommand("start", "introduce the bot"),
            BotCommand(self.profile_command, "tell the bot your name, city and phone number"),
        ]

        await application.bot.set_my_commands(commands=bot_commands)
