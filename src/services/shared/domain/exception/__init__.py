from .exceptions import (
    BusinessRuleViolationException,
    ConflictException,
    DomainException,
    DuplicateResourceException,
    ForbiddenException,
    InvalidTransitionException,
    OptimisticLockException,
    ResourceNotFoundException,
    ValidationException,
)

__all__ = [
    "BusinessRuleViolationException",
    "ConflictException",
    "DomainException",
    "DuplicateResourceException",
    "ForbiddenException",
    "InvalidTransitionException",
    "OptimisticLockException",
    "ResourceNotFoundException",
    "ValidationException",
]
