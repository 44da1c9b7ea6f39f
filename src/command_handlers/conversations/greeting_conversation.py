import logging
from typing import Optional

from telegram import Update
from telegram.ext import CallbackContext, CommandHandler, ConversationHandler, MessageHandler, filters

from command_handlers.conversations.conversation_flow import ConversationFlow
from localization import Key
from localization.locale_store import LocaleKeyAccessor
from models.enums import ProfileField
from models.models import UserProfile
from providers.profile_state_provider import ProfileStateProviding

logger = logging.getLogger(__name__)

# Minimum length requirement for names
NAME_LENGTH_MIN = 2

AWAITING_NAME = 1
AWAITING_CITY = 2
AWAITING_PHONE = 3
DONE = ConversationHandler.END

VALIDATION_SUCCEEDED = True
VALIDATION_FAILED = not VALIDATION_SUCCEEDED

# Order matters: the flow always asks for the first missing field at or after its current position.
PROFILE_STEPS = (
    (ProfileField.NAME, AWAITING_NAME, "greeting_prompt_name"),
    (ProfileField.CITY, AWAITING_CITY, "greeting_prompt_city"),
    (ProfileField.PHONE, AWAITING_PHONE, "greeting_prompt_phone"),
)


class GreetingConversation(ConversationFlow):
    """
    Collects a user's name, city and phone number, then greets them with a summary.

    The flow runs five steps in a fixed order:
        1. initialize the stored profile (optionally seeded)
        2. prompt for name
        3. store name, prompt for city
        4. store city, prompt for phone
        5. store phone, display the summary

    A step whose field is already populated is skipped without prompting, so a
    partially filled profile resumes at the first missing field.
    """

    def __init__(
        self,
        dialog_id: str,
        profile_accessor: ProfileStateProviding,
        default_profile: Optional[UserProfile] = None,
        command: str = "profile",
        persistent: bool = False,
    ):
        if not dialog_id:
            raise ValueError("Missing parameter. dialog_id is required")
        if not profile_accessor:
            raise ValueError("Missing parameter. profile_accessor is required")

        self.dialog_id = dialog_id
        self.profile_accessor = profile_accessor
        self.default_profile = default_profile
        self.command = command
        self.persistent = persistent

    @property
    def conversation_handler(self) -> ConversationHandler:
        text_answer = filters.TEXT & ~filters.COMMAND
        return ConversationHandler(
            entry_points=[CommandHandler(self.command, self.initialize_state)],
            states={
                AWAITING_NAME: [MessageHandler(text_answer, self.receive_name)],
                AWAITING_CITY: [MessageHandler(text_answer, self.receive_city)],
                AWAITING_PHONE: [MessageHandler(text_answer, self.receive_phone)],
            },
            fallbacks=[],
            name=self.dialog_id,
            persistent=self.persistent,
        )

    async def initialize_state(self, update: Update, context: CallbackContext,
                               options: Optional[UserProfile] = None) -> int:
        """Create the profile if the store has none yet, then move on to the name step."""
        profile = await self.profile_accessor.get(context)
        if profile is None:
            seed = options or self.default_profile
            profile = seed.model_copy() if seed else UserProfile()
            await self.profile_accessor.set(context, profile)
            logger.info(f"Initialized profile for user {update.effective_user.id}")

        return await self.prompt_for_name(update, context)

    async def prompt_for_name(self, update: Update, context: CallbackContext) -> int:
        profile = await self.profile_accessor.get(context)
        return await self._advance(update, context, profile, position=0)

    async def receive_name(self, update: Update, context: CallbackContext) -> int:
        keys = self._keys_for(update)
        if not await self.validate_name(update, keys):
            return AWAITING_NAME
        return await self._store_and_advance(update, context, ProfileField.NAME, position=1)

    async def receive_city(self, update: Update, context: CallbackContext) -> int:
        if not await self.validate_city(update, self._keys_for(update)):
            return AWAITING_CITY
        return await self._store_and_advance(update, context, ProfileField.CITY, position=2)

    async def receive_phone(self, update: Update, context: CallbackContext) -> int:
        if not await self.validate_phone(update, self._keys_for(update)):
            return AWAITING_PHONE
        return await self._store_and_advance(update, context, ProfileField.PHONE, position=3)

    async def validate_name(self, update: Update, keys: LocaleKeyAccessor) -> bool:
        value = (update.message.text or "").strip()
        if len(value) >= NAME_LENGTH_MIN:
            return VALIDATION_SUCCEEDED

        logger.debug(f"Rejected name of length {len(value)} from user {update.effective_user.id}")
        await update.message.reply_text(keys.greeting_name_too_short.format(min_length=NAME_LENGTH_MIN))
        return VALIDATION_FAILED

    async def validate_city(self, update: Update, keys: LocaleKeyAccessor) -> bool:
        return VALIDATION_SUCCEEDED

    async def validate_phone(self, update: Update, keys: LocaleKeyAccessor) -> bool:
        return VALIDATION_SUCCEEDED

    async def greet_user(self, update: Update, context: CallbackContext) -> int:
        profile = await self.profile_accessor.get(context)
        keys = self._keys_for(update)
        await update.message.reply_text(
            keys.greeting_summary.format(name=profile.name, city=profile.city, phone=profile.phone)
        )
        logger.info(f"Greeted user {update.effective_user.id}, ending {self.dialog_id}")
        return DONE

    async def _store_and_advance(self, update: Update, context: CallbackContext,
                                 field: ProfileField, position: int) -> int:
        profile = await self.profile_accessor.get(context)
        if profile.set_answer(field, update.message.text):
            await self.profile_accessor.set(context, profile)
        return await self._advance(update, context, profile, position)

    async def _advance(self, update: Update, context: CallbackContext,
                       profile: UserProfile, position: int) -> int:
        """Prompt for the first missing field from `position` onward, or finish with the summary."""
        if profile.is_complete:
            return await self.greet_user(update, context)

        keys = self._keys_for(update)
        for field, state, prompt_key in PROFILE_STEPS[position:]:
            if profile.has(field):
                continue
            await update.message.reply_text(getattr(keys, prompt_key).format(**profile.model_dump()))
            logger.info(f"Asked user {update.effective_user.id} for {field.value}")
            return state

        return await self.greet_user(update, context)

    @staticmethod
    def _keys_for(update: Update) -> LocaleKeyAccessor:
        return Key.for_language_code(update.effective_user.language_code)
