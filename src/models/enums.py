from enum import Enum


class ProfileField(str, Enum):
    NAME = "name"
    CITY = "city"
    PHONE = "phone"
