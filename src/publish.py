import sys
from pathlib import Path

# Add src directory to Python path
src_dir = str(Path(__file__).parent)
if src_dir not in sys.path:
    sys.path.append(src_dir)

from dotenv import load_dotenv
from deploy.publisher import Publisher
import logging

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

def main():
    """Zip the current directory and upload it to the configured site."""
    load_dotenv()

    try:
        publisher = Publisher.from_settings(root_folder=Path.cwd())
    except ValueError as e:
        logger.error(f"Cannot publish: {e}")
        return

    publisher.publish()

if __name__ == "__main__":
    main()
