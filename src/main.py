import sys
from pathlib import Path

# Add src directory to Python path
src_dir = str(Path(__file__).parent)
if src_dir not in sys.path:
    sys.path.append(src_dir)

from dotenv import load_dotenv
from bots.profile_bot import ProfileBot
from config.settings import settings
import logging

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

def main():
    """Start the bot."""
    # Load environment variables
    load_dotenv()
    
    token = settings.telegram_bot_token
    if not token:
        logger.error("Error: TELEGRAM_BOT_TOKEN not found in environment variables")
        return
    
    # Create and run bot
    bot = ProfileBot(
        token,
        persistence_path=settings.persistence_path,
        profile_command=settings.profile_command,
    )
    logger.info("Starting bot...")
    
    try:
        bot.run()
    except KeyboardInterrupt:
        logger.info("Bot stopped by user")
    except Exception as e:
        logger.error(f"Error running bot: {str(e)}", exc_info=True)

if __name__ == "__main__":
    main()
