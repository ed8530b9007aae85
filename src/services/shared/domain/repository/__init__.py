from .repository import ReadRepository, Repository

__all__ = ["ReadRepository", "Repository"]
