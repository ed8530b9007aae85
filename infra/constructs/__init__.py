from .api import Api
from .auth import Auth
from .database import Database
from .functions import Functions

__all__ = ["Api", "Auth", "Database", "Functions"]
