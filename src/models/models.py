from pydantic import BaseModel
from typing import Optional

from models.enums import ProfileField


def capitalize_first(text: str) -> str:
    """Uppercase the first character and leave the remainder untouched."""
    if not text:
        return text
    return text[0].upper() + text[1:]


class UserProfile(BaseModel):
    name: Optional[str] = None
    city: Optional[str] = None
    phone: Optional[str] = None

    def has(self, field: ProfileField) -> bool:
        return bool(getattr(self, field.value))

    def set_answer(self, field: ProfileField, answer: Optional[str]) -> bool:
        """
        Store a capitalized answer for `field` if the field is still empty.

        Returns True when the profile was changed. Fields that are already set
        are never overwritten, and empty answers are ignored.
        """
        if self.has(field) or not answer:
            return False
        setattr(self, field.value, capitalize_first(answer))
        return True

    @property
    def is_complete(self) -> bool:
        return all(self.has(field) for field in ProfileField)
