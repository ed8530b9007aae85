from enum import Enum


class UserStatus(str, Enum):
    """アカウント状態"""

    ACTIVE = "ACTIVE"
    BANNED = "BANNED"
