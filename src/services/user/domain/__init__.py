from .entity import User as User
from .enum import UserStatus as UserStatus
from .repository import UserRepository as UserRepository
