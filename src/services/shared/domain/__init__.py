from .entity import AggregateRoot as AggregateRoot
from .entity import DomainEvent as DomainEvent
from .entity import Entity as Entity
from .enum import Role as Role
from .exception import (
    BusinessRuleViolationException as BusinessRuleViolationException,
)
from .exception import (
    ConflictException as ConflictException,
)
from .exception import (
    DomainException as DomainException,
)
from .exception import (
    DuplicateResourceException as DuplicateResourceException,
)
from .exception import (
    ForbiddenException as ForbiddenException,
)
from .exception import (
    InvalidTransitionException as InvalidTransitionException,
)
from .exception import (
    OptimisticLockException as OptimisticLockException,
)
from .exception import (
    ResourceNotFoundException as ResourceNotFoundException,
)
from .exception import (
    ValidationException as ValidationException,
)
from .repository import ReadRepository as ReadRepository
from .repository import Repository as Repository
from .value_object import (
    Actor as Actor,
)
from .value_object import (
    TimeRange as TimeRange,
)
