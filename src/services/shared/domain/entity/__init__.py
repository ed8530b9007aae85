from .entity import AggregateRoot, DomainEvent, Entity

__all__ = ["AggregateRoot", "DomainEvent", "Entity"]
