from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional
import os
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    # Bot token
    telegram_bot_token: str = Field(default=os.getenv("TELEGRAM_BOT_TOKEN", ""))

    # Conversation
    profile_command: str = Field(default=os.getenv("PROFILE_COMMAND", "profile"))
    default_locale: str = Field(default=os.getenv("DEFAULT_LOCALE", "en"))

    # Pickle file for user data; empty keeps state in memory only
    persistence_path: Optional[str] = Field(default=os.getenv("PERSISTENCE_PATH") or None)

    # Publishing (Kudu zip deploy)
    publish_site_name: str = Field(default=os.getenv("PUBLISH_SITE_NAME", "mycheesebot"))
    publish_kudu_api: str = Field(
        default=os.getenv("PUBLISH_KUDU_API", "https://mycheesebot.scm.azurewebsites.net/api/zip/site/wwwroot")
    )
    publish_username: str = Field(default=os.getenv("PUBLISH_USERNAME", ""))
    publish_password: str = Field(default=os.getenv("PUBLISH_PASSWORD", ""))
    publish_zip_path: Optional[str] = Field(default=os.getenv("PUBLISH_ZIP_PATH") or None)
    publish_content_type: str = Field(default=os.getenv("PUBLISH_CONTENT_TYPE", "application/zip"))

    class Config:
        env_file = ".env"

settings = Settings()
