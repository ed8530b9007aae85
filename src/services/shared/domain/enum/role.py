from enum import Enum


class Role(str, Enum):
    """利用者のロール"""

    STUDENT = "STUDENT"
    TUTOR = "TUTOR"
    ADMIN = "ADMIN"
