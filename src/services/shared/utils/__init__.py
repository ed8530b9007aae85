from .error_handler import translate_errors
from .http_response import api_response, error_response, status_code_for
from .identity import IdentityError, resolve_actor

__all__ = [
    "IdentityError",
    "api_response",
    "error_response",
    "resolve_actor",
    "status_code_for",
    "translate_errors",
]
