from .tutor_profile_repository import TutorProfileRepository

__all__ = ["TutorProfileRepository"]
