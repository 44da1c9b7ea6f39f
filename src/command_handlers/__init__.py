"""
Command Handlers package.

This package contains individual command handlers for Telegram bot interactions:
- start_handler: Handles the /start command
- conversations/: Contains conversation handlers for different bot functionalities
"""
