from .user_status import UserStatus

__all__ = ["UserStatus"]
