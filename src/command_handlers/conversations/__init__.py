"""
Conversation flows for the Telegram bot.

- conversation_flow: base class every flow implements
- greeting_conversation: asks for name, city and phone number, then greets the user
"""
