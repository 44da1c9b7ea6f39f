from functools import partial

from telegram import Update
from telegram.ext import CommandHandler, ContextTypes
from localization import Key
import logging

logger = logging.getLogger(__name__)

class StartHandler:
    """Handler for the /start command."""
    
    @staticmethod
    def get_handler(profile_command: str = "profile") -> CommandHandler:
        """Get the start command handler.
        
        Args:
            profile_command: Command advertised in the introduction message

        Returns:
            CommandHandler: The start command handler
        """
        return CommandHandler("start", partial(StartHandler._start_command, profile_command=profile_command))
    
    @staticmethod
    async def _start_command(update: Update, context: ContextTypes.DEFAULT_TYPE, profile_command: str = "profile") -> None:
        """Handle the /start command.
        
        Args:
            update: The update object
            context: The context object
            profile_command: Command that starts the profile conversation
        """
        try:
            logger.info(f"Start command received from user {update.effective_user.id}")
            keys = Key.for_language_code(update.effective_user.language_code)
            await update.message.reply_text(keys.start_greeting.format(command=profile_command))
            logger.info("Start command response sent")
        except Exception as e:
            logger.error(f"Error in start command: {str(e)}", exc_info=True)
            raise
